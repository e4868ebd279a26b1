import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from music.serializers import (
    AssignGenresSerializer,
    GenreCreateSerializer,
    GenreDetailSerializer,
    GenreDiscoverySerializer,
    GenreQuerySerializer,
    GenreSerializer,
    GenreUpdateSerializer,
    GenreWithParentSerializer,
    PopularGenresQuerySerializer,
    TrackGenreSerializer,
)
from music.services import genres as genre_service

logger = logging.getLogger(__name__)


class GenreListView(APIView):
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    def get(self, request):
        query = GenreQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = genre_service.find_all(**query.validated_data)
        result["data"] = GenreSerializer(result["data"], many=True).data
        return Response(result)

    def post(self, request):
        serializer = GenreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        genre = genre_service.create_genre(**serializer.validated_data)
        return Response(
            GenreSerializer(genre).data,
            status=status.HTTP_201_CREATED,
        )


class GenreDiscoveryView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response(
            GenreDiscoverySerializer(genre_service.get_discovery()).data
        )


class PopularGenresView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        query = PopularGenresQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        genres = genre_service.get_popular(limit=query.validated_data["limit"])
        return Response(GenreWithParentSerializer(genres, many=True).data)


class GenreDetailView(APIView):
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    def get(self, request, genre_id):
        genre = genre_service.find_one(genre_id)
        return Response(GenreDetailSerializer(genre).data)

    def patch(self, request, genre_id):
        serializer = GenreUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        genre = genre_service.update_genre(genre_id, serializer.validated_data)
        return Response(GenreDetailSerializer(genre).data)

    def delete(self, request, genre_id):
        genre_service.remove_genre(genre_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class GenreBySlugView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, slug):
        genre = genre_service.find_by_slug(slug)
        return Response(GenreDetailSerializer(genre).data)


class GenreChildrenView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, genre_id):
        children = genre_service.get_children(genre_id)
        return Response(GenreSerializer(children, many=True).data)


class GenreParentChainView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, genre_id):
        chain = genre_service.get_parent_chain(genre_id)
        return Response(GenreSerializer(chain, many=True).data)


class TrackGenresView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, track_id):
        genres = genre_service.get_track_genres(track_id)
        return Response(GenreWithParentSerializer(genres, many=True).data)


class AssignTrackGenresView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, track_id):
        serializer = AssignGenresSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        assignments = genre_service.assign_genres_to_track(
            track_id,
            serializer.validated_data["genre_ids"],
        )
        return Response(
            TrackGenreSerializer(assignments, many=True).data,
            status=status.HTTP_200_OK,
        )


class TrackGenreDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, track_id, genre_id):
        genre_service.remove_genre_from_track(track_id, genre_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecalculateTrackCountsView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request):
        updated = genre_service.recalculate_all_track_counts()
        logger.info(f"Track counts recalculated by {request.user.pk}")
        return Response({"updated": updated}, status=status.HTTP_200_OK)
