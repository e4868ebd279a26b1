import uuid

from django.conf import settings
from django.contrib.postgres.search import SearchVectorField
from django.db import models


class Artist(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="artist_profile",
    )
    name = models.CharField(max_length=255, db_index=True)
    genre = models.CharField(max_length=100, null=True, blank=True)
    bio = models.TextField(null=True, blank=True)
    profile_image = models.CharField(max_length=500, null=True, blank=True)
    cover_image = models.CharField(max_length=500, null=True, blank=True)
    wallet_address = models.CharField(max_length=255, blank=True, default="")
    total_tips_received = models.DecimalField(max_digits=20, decimal_places=7, default=0)
    email_notifications = models.BooleanField(default=True)

    # Filled by a database trigger (see migration 0002); empty outside PostgreSQL
    search_vector = SearchVectorField(null=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "artists"
        indexes = [
            models.Index(fields=["-created_at"], name="artist_created_idx"),
            models.Index(fields=["-total_tips_received"], name="artist_tips_idx"),
        ]

    def __str__(self):
        return self.name
