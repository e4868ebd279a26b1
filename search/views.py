from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from search.serializers import (
    SearchQuerySerializer,
    SearchResultSerializer,
    SearchSuggestionsQuerySerializer,
    SuggestionsSerializer,
)
from search.services.search import get_suggestions, search


class SearchView(APIView):
    """
    Full-text + fuzzy search over artists and public tracks.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request):
        query = SearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = search(**query.validated_data)
        return Response(SearchResultSerializer(result).data)


class SearchSuggestionsView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request):
        query = SearchSuggestionsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        suggestions = get_suggestions(**query.validated_data)
        return Response(SuggestionsSerializer(suggestions).data)
