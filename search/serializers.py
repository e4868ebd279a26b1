from rest_framework import serializers
from music.serializers import ArtistSerializer, TrackSerializer
from search.services.search import SEARCH_TYPES, SORT_OPTIONS


class SearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=SEARCH_TYPES, required=False)
    genre = serializers.CharField(required=False, allow_blank=True)
    release_date_from = serializers.DateField(required=False)
    release_date_to = serializers.DateField(required=False)
    sort = serializers.ChoiceField(choices=SORT_OPTIONS, default="relevance")
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)


class SearchSuggestionsQuerySerializer(serializers.Serializer):
    q = serializers.CharField(allow_blank=True)
    type = serializers.ChoiceField(choices=SEARCH_TYPES, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=20, default=10)


class PaginatedArtistsSerializer(serializers.Serializer):
    data = ArtistSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_pages = serializers.IntegerField()


class PaginatedTracksSerializer(serializers.Serializer):
    data = TrackSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_pages = serializers.IntegerField()


class SearchResultSerializer(serializers.Serializer):
    # missing keys are skipped, so an unsearched type never shows up
    artists = PaginatedArtistsSerializer(required=False)
    tracks = PaginatedTracksSerializer(required=False)


class SuggestionSerializer(serializers.Serializer):
    type = serializers.CharField()
    id = serializers.UUIDField()
    title = serializers.CharField()
    subtitle = serializers.CharField(allow_null=True)


class SuggestionsSerializer(serializers.Serializer):
    artists = SuggestionSerializer(many=True)
    tracks = SuggestionSerializer(many=True)
