import uuid

from django.db import models
from .genre import Genre
from .track import Track


class TrackGenre(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    track = models.ForeignKey(
        Track,
        on_delete=models.CASCADE,
        related_name="track_genres",
    )
    genre = models.ForeignKey(
        Genre,
        on_delete=models.CASCADE,
        related_name="track_genres",
    )

    class Meta:
        db_table = "track_genres"
        constraints = [
            models.UniqueConstraint(
                fields=["track", "genre"],
                name="track_genre_unique",
            )
        ]

    def __str__(self):
        return f"{self.track_id} · {self.genre_id}"
