import re
import uuid

from django.core.exceptions import ValidationError
from django.db import models

from music.services.genre_tree import build_children_map, collect_descendants


class GenreQuerySet(models.QuerySet):
    def roots(self):
        return self.filter(parent__isnull=True)

    def popular(self):
        return self.order_by("-track_count", "name")


class Genre(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(null=True, blank=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
    )
    # Cached count of TrackGenre rows; recomputed by every assignment change
    track_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = GenreQuerySet.as_manager()

    class Meta:
        db_table = "genres"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["-track_count", "name"], name="genre_popular_idx"),
        ]

    def clean(self):
        """Slug and hierarchy rules for ModelForm edits (the admin)."""
        super().clean()

        slug = self.generate_slug(self.name or "")
        if not slug:
            raise ValidationError({"name": "Name does not produce a usable slug."})
        if Genre.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            raise ValidationError({"name": f'Genre with slug "{slug}" already exists.'})

        if self.parent_id is None:
            return
        if self.parent_id == self.pk:
            raise ValidationError({"parent": "Genre cannot be its own parent."})

        pairs = Genre.objects.order_by().values_list("id", "parent_id")
        if self.parent_id in collect_descendants(build_children_map(pairs), self.pk):
            raise ValidationError({"parent": "Cannot set parent to a descendant genre."})

    def save(self, *args, **kwargs):
        self.slug = self.generate_slug(self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name

    @staticmethod
    def generate_slug(name):
        """
        "Drum & Bass" -> "drum-bass". Only ASCII word characters survive.
        """
        slug = name.lower().strip()
        slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
        slug = re.sub(r"[\s_-]+", "-", slug)
        return slug.strip("-")
