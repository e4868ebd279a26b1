from django.contrib import admin
from django.db import transaction

from music.models import Artist, Genre, Track, TrackGenre
from music.services.genres import update_track_counts


@admin.register(Genre)
class GenreAdmin(admin.ModelAdmin):
    # parent changes are validated by Genre.clean()
    list_display = ("name", "slug", "parent", "track_count")
    search_fields = ("name", "slug")
    list_select_related = ("parent",)
    readonly_fields = ("slug", "track_count")


@admin.register(Artist)
class ArtistAdmin(admin.ModelAdmin):
    list_display = ("name", "genre", "total_tips_received", "created_at")
    search_fields = ("name", "genre")


def _assigned_genre_ids(track_ids):
    return set(
        TrackGenre.objects
        .filter(track_id__in=track_ids)
        .values_list("genre_id", flat=True)
    )


@admin.register(Track)
class TrackAdmin(admin.ModelAdmin):
    list_display = ("title", "artist", "genre", "is_public", "plays", "tip_count")
    list_filter = ("is_public",)
    search_fields = ("title", "genre")
    list_select_related = ("artist",)

    def delete_model(self, request, obj):
        genre_ids = _assigned_genre_ids([obj.pk])
        with transaction.atomic():
            super().delete_model(request, obj)
            update_track_counts(genre_ids)

    def delete_queryset(self, request, queryset):
        genre_ids = _assigned_genre_ids(queryset.values_list("pk", flat=True))
        with transaction.atomic():
            super().delete_queryset(request, queryset)
            update_track_counts(genre_ids)


@admin.register(TrackGenre)
class TrackGenreAdmin(admin.ModelAdmin):
    """Every change recomputes the cached track_count of the genres involved."""
    list_display = ("track", "genre")
    list_select_related = ("track", "genre")

    def save_model(self, request, obj, form, change):
        genre_ids = {obj.genre_id}
        if change:
            genre_ids.update(
                TrackGenre.objects.filter(pk=obj.pk).values_list("genre_id", flat=True)
            )
        with transaction.atomic():
            super().save_model(request, obj, form, change)
            update_track_counts(genre_ids)

    def delete_model(self, request, obj):
        genre_id = obj.genre_id
        with transaction.atomic():
            super().delete_model(request, obj)
            update_track_counts([genre_id])

    def delete_queryset(self, request, queryset):
        genre_ids = set(queryset.values_list("genre_id", flat=True))
        with transaction.atomic():
            super().delete_queryset(request, queryset)
            update_track_counts(genre_ids)
