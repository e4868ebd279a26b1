from rest_framework import serializers
from music.models import Artist, Genre, Track, TrackGenre


# ---------------------- OUTPUT ----------------------

class GenreSerializer(serializers.ModelSerializer):
    parent_genre_id = serializers.UUIDField(source="parent_id", read_only=True, allow_null=True)

    class Meta:
        model = Genre
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "parent_genre_id",
            "track_count",
            "created_at",
        ]


class GenreWithChildrenSerializer(GenreSerializer):
    children = GenreSerializer(many=True, read_only=True)

    class Meta(GenreSerializer.Meta):
        fields = GenreSerializer.Meta.fields + ["children"]


class GenreWithParentSerializer(GenreSerializer):
    parent = GenreSerializer(read_only=True, allow_null=True)

    class Meta(GenreSerializer.Meta):
        fields = GenreSerializer.Meta.fields + ["parent"]


class TrackGenreSerializer(serializers.ModelSerializer):
    track_id = serializers.UUIDField(read_only=True)
    genre_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = TrackGenre
        fields = ["id", "track_id", "genre_id"]


class GenreDetailSerializer(GenreSerializer):
    """Genre with parent, children and track assignments attached"""
    parent = GenreSerializer(read_only=True, allow_null=True)
    children = GenreSerializer(many=True, read_only=True)
    track_genres = TrackGenreSerializer(many=True, read_only=True)

    class Meta(GenreSerializer.Meta):
        fields = GenreSerializer.Meta.fields + ["parent", "children", "track_genres"]


class GenreDiscoverySerializer(serializers.Serializer):
    root_genres = GenreWithChildrenSerializer(many=True)
    all_genres = GenreWithChildrenSerializer(many=True)


class ArtistSerializer(serializers.ModelSerializer):
    class Meta:
        model = Artist
        fields = [
            "id",
            "name",
            "genre",
            "bio",
            "profile_image",
            "cover_image",
            "wallet_address",
            "total_tips_received",
            "created_at",
        ]


class ArtistSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Artist
        fields = ["id", "name", "profile_image"]


class TrackSerializer(serializers.ModelSerializer):
    artist = ArtistSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = Track
        fields = [
            "id",
            "title",
            "artist",
            "duration",
            "audio_url",
            "cover_art_url",
            "genre",
            "release_date",
            "description",
            "album",
            "plays",
            "tip_count",
            "total_tips",
            "created_at",
        ]


# ---------------------- INPUT ----------------------

class GenreCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    parent_genre_id = serializers.UUIDField(required=False, allow_null=True)


class GenreUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100, required=False)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    parent_genre_id = serializers.UUIDField(required=False, allow_null=True)


class GenreQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)
    search = serializers.CharField(required=False, allow_blank=True)
    parent_id = serializers.UUIDField(required=False)
    root_only = serializers.BooleanField(required=False, default=False)


class PopularGenresQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)


class AssignGenresSerializer(serializers.Serializer):
    genre_ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=True,
    )
