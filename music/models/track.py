import uuid

from django.contrib.postgres.search import SearchVectorField
from django.db import models
from .artist import Artist


class Track(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    artist = models.ForeignKey(
        Artist,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="tracks",
    )
    title = models.CharField(max_length=255, db_index=True)
    duration = models.PositiveIntegerField(null=True, blank=True)
    audio_url = models.CharField(max_length=500, null=True, blank=True)
    cover_art_url = models.CharField(max_length=500, null=True, blank=True)
    genre = models.CharField(max_length=100, null=True, blank=True)
    release_date = models.DateField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    album = models.CharField(max_length=255, null=True, blank=True)
    is_public = models.BooleanField(default=False)

    plays = models.PositiveIntegerField(default=0)
    tip_count = models.PositiveIntegerField(default=0)
    total_tips = models.DecimalField(max_digits=20, decimal_places=7, default=0)

    # Filled by a database trigger (see migration 0002); empty outside PostgreSQL
    search_vector = SearchVectorField(null=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tracks"
        indexes = [
            models.Index(fields=["is_public", "-created_at"], name="track_public_created_idx"),
            models.Index(fields=["release_date"], name="track_release_idx"),
            models.Index(fields=["-tip_count", "-total_tips"], name="track_tips_idx"),
            models.Index(fields=["-plays"], name="track_plays_idx"),
        ]

    def __str__(self):
        return self.title
