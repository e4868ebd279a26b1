import uuid

import django.contrib.postgres.search
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Artist",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("genre", models.CharField(blank=True, max_length=100, null=True)),
                ("bio", models.TextField(blank=True, null=True)),
                ("profile_image", models.CharField(blank=True, max_length=500, null=True)),
                ("cover_image", models.CharField(blank=True, max_length=500, null=True)),
                ("wallet_address", models.CharField(blank=True, default="", max_length=255)),
                ("total_tips_received", models.DecimalField(decimal_places=7, default=0, max_digits=20)),
                ("email_notifications", models.BooleanField(default=True)),
                ("search_vector", django.contrib.postgres.search.SearchVectorField(editable=False, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="artist_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "artists",
                "indexes": [
                    models.Index(fields=["-created_at"], name="artist_created_idx"),
                    models.Index(fields=["-total_tips_received"], name="artist_tips_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Genre",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("track_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="children",
                        to="music.genre",
                    ),
                ),
            ],
            options={
                "db_table": "genres",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["-track_count", "name"], name="genre_popular_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Track",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(db_index=True, max_length=255)),
                ("duration", models.PositiveIntegerField(blank=True, null=True)),
                ("audio_url", models.CharField(blank=True, max_length=500, null=True)),
                ("cover_art_url", models.CharField(blank=True, max_length=500, null=True)),
                ("genre", models.CharField(blank=True, max_length=100, null=True)),
                ("release_date", models.DateField(blank=True, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("album", models.CharField(blank=True, max_length=255, null=True)),
                ("is_public", models.BooleanField(default=False)),
                ("plays", models.PositiveIntegerField(default=0)),
                ("tip_count", models.PositiveIntegerField(default=0)),
                ("total_tips", models.DecimalField(decimal_places=7, default=0, max_digits=20)),
                ("search_vector", django.contrib.postgres.search.SearchVectorField(editable=False, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "artist",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tracks",
                        to="music.artist",
                    ),
                ),
            ],
            options={
                "db_table": "tracks",
                "indexes": [
                    models.Index(fields=["is_public", "-created_at"], name="track_public_created_idx"),
                    models.Index(fields=["release_date"], name="track_release_idx"),
                    models.Index(fields=["-tip_count", "-total_tips"], name="track_tips_idx"),
                    models.Index(fields=["-plays"], name="track_plays_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TrackGenre",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "genre",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="track_genres",
                        to="music.genre",
                    ),
                ),
                (
                    "track",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="track_genres",
                        to="music.track",
                    ),
                ),
            ],
            options={
                "db_table": "track_genres",
                "constraints": [
                    models.UniqueConstraint(fields=("track", "genre"), name="track_genre_unique"),
                ],
            },
        ),
    ]
