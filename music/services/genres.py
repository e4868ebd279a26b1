import logging
import uuid

from django.db import IntegrityError, transaction
from django.db.models import Count, IntegerField, OuterRef, Subquery, Value
from django.db.models.functions import Coalesce

from music.exceptions import BadRequest, Conflict, NotFound
from music.models import Genre, Track, TrackGenre
from music.services.genre_tree import (
    build_children_map,
    build_parent_map,
    collect_descendants,
    walk_parent_chain,
)
from utils.pagination import paginate

logger = logging.getLogger(__name__)


def _to_uuid(value):
    """Parses an identifier; malformed ids resolve to None (never match)."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def _genre_pairs(lock=False):
    qs = Genre.objects.order_by()
    if lock:
        qs = qs.select_for_update()
    return list(qs.values_list("id", "parent_id"))


# =========================================================
# LOOKUPS
# =========================================================

def find_one(genre_id) -> Genre:
    pk = _to_uuid(genre_id)
    genre = None
    if pk is not None:
        genre = (
            Genre.objects
            .select_related("parent")
            .prefetch_related("children", "track_genres")
            .filter(pk=pk)
            .first()
        )

    if genre is None:
        raise NotFound(f"Genre with ID {genre_id} not found")
    return genre


def find_by_slug(slug: str) -> Genre:
    genre = (
        Genre.objects
        .select_related("parent")
        .prefetch_related("children", "track_genres")
        .filter(slug=slug)
        .first()
    )
    if genre is None:
        raise NotFound(f'Genre with slug "{slug}" not found')
    return genre


def find_all(page=1, limit=10, search=None, parent_id=None, root_only=False) -> dict:
    qs = Genre.objects.all()

    if search:
        qs = qs.filter(name__icontains=search)

    if parent_id:
        qs = qs.filter(parent_id=_to_uuid(parent_id))
    elif root_only:
        qs = qs.roots()

    return paginate(qs.order_by("name", "pk"), page, limit)


def get_children(genre_id) -> list:
    genre = find_one(genre_id)
    return list(Genre.objects.filter(parent=genre).order_by("name"))


def get_parent_chain(genre_id) -> list:
    """
    Ancestors ordered root -> immediate parent.
    """
    genre = find_one(genre_id)
    chain_ids = walk_parent_chain(build_parent_map(_genre_pairs()), genre.pk)
    if not chain_ids:
        return []

    genres = Genre.objects.select_related("parent").in_bulk(chain_ids)
    return [genres[pk] for pk in chain_ids if pk in genres]


def get_discovery() -> dict:
    root_genres = (
        Genre.objects.roots()
        .prefetch_related("children")
        .order_by("name")
    )
    all_genres = (
        Genre.objects
        .select_related("parent")
        .prefetch_related("children")
        .popular()
    )
    return {
        "root_genres": list(root_genres),
        "all_genres": list(all_genres),
    }


def get_popular(limit=10) -> list:
    return list(
        Genre.objects.select_related("parent").popular()[:limit]
    )


def get_track_genres(track_id) -> list:
    pk = _to_uuid(track_id)
    if pk is None:
        return []
    return list(
        Genre.objects
        .filter(track_genres__track_id=pk)
        .select_related("parent")
        .order_by("name")
    )


# =========================================================
# MUTATIONS
# =========================================================

@transaction.atomic
def create_genre(name: str, description=None, parent_genre_id=None) -> Genre:
    if Genre.objects.filter(name=name).exists():
        raise Conflict(f'Genre with name "{name}" already exists')

    parent = None
    if parent_genre_id:
        parent_pk = _to_uuid(parent_genre_id)
        parent = Genre.objects.filter(pk=parent_pk).first() if parent_pk else None
        if parent is None:
            raise NotFound(f"Parent genre with ID {parent_genre_id} not found")

    slug = Genre.generate_slug(name)
    if not slug:
        raise BadRequest(f'Genre name "{name}" does not produce a usable slug')

    if Genre.objects.filter(slug=slug).exists():
        raise Conflict(f'Genre with slug "{slug}" already exists')

    genre = Genre(
        name=name,
        description=description,
        parent=parent,
        track_count=0,
    )
    try:
        with transaction.atomic():
            genre.save()
    except IntegrityError:
        # lost a race against a concurrent create with the same name/slug
        raise Conflict(f'Genre with name "{name}" already exists')

    logger.info(f"Created genre {genre.name} ({genre.slug})")
    return genre


@transaction.atomic
def update_genre(genre_id, data: dict) -> Genre:
    """
    Partial update. Keys absent from `data` are left alone; an explicit
    `parent_genre_id: None` detaches the genre to the root level.
    """
    pk = _to_uuid(genre_id)
    genre = Genre.objects.select_for_update().filter(pk=pk).first() if pk else None
    if genre is None:
        raise NotFound(f"Genre with ID {genre_id} not found")

    name = data.get("name")
    if name and name != genre.name:
        if Genre.objects.filter(name=name).exclude(pk=genre.pk).exists():
            raise Conflict(f'Genre with name "{name}" already exists')

        slug = Genre.generate_slug(name)
        if not slug:
            raise BadRequest(f'Genre name "{name}" does not produce a usable slug')
        if Genre.objects.filter(slug=slug).exclude(pk=genre.pk).exists():
            raise Conflict(f'Genre with slug "{slug}" already exists')

        genre.name = name

    if "parent_genre_id" in data:
        raw_parent = data["parent_genre_id"]
        parent_pk = _to_uuid(raw_parent) if raw_parent else None

        if raw_parent and parent_pk == genre.pk:
            raise BadRequest("Genre cannot be its own parent")

        if raw_parent:
            if parent_pk is None or not Genre.objects.filter(pk=parent_pk).exists():
                raise NotFound(f"Parent genre with ID {raw_parent} not found")

            # rows stay locked until commit so concurrent moves cannot interleave
            children_map = build_children_map(_genre_pairs(lock=True))
            if parent_pk in collect_descendants(children_map, genre.pk):
                raise BadRequest("Cannot set parent to a descendant genre")

        genre.parent_id = parent_pk

    if "description" in data:
        genre.description = data["description"]

    try:
        with transaction.atomic():
            genre.save()
    except IntegrityError:
        raise Conflict(f'Genre with name "{genre.name}" already exists')

    logger.info(f"Updated genre {genre.pk}")
    return find_one(genre.pk)


@transaction.atomic
def remove_genre(genre_id) -> None:
    pk = _to_uuid(genre_id)
    genre = Genre.objects.select_for_update().filter(pk=pk).first() if pk else None
    if genre is None:
        raise NotFound(f"Genre with ID {genre_id} not found")

    children_count = Genre.objects.filter(parent=genre).count()
    if children_count > 0:
        raise BadRequest(
            f"Cannot delete genre with {children_count} sub-genre(s). "
            "Please delete or reassign sub-genres first."
        )

    # live count; the cached track_count may be stale after track deletions
    assigned = TrackGenre.objects.filter(genre=genre).count()
    if assigned > 0:
        raise BadRequest(
            f"Cannot delete genre assigned to {assigned} track(s). "
            "Please remove genre assignments first."
        )

    genre.delete()
    logger.info(f"Deleted genre {genre_id}")


@transaction.atomic
def assign_genres_to_track(track_id, genre_ids) -> list:
    """
    Replaces the whole genre set of a track. Every genre that gained or
    lost the track gets its track_count recomputed in the same transaction.
    """
    track_pk = _to_uuid(track_id)
    if track_pk is None or not Track.objects.filter(pk=track_pk).exists():
        raise NotFound(f"Track with ID {track_id} not found")

    requested = list(dict.fromkeys(str(g) for g in genre_ids))
    parsed = {raw: _to_uuid(raw) for raw in requested}

    found = set(
        Genre.objects
        .filter(pk__in=[p for p in parsed.values() if p is not None])
        .values_list("id", flat=True)
    )
    missing = [raw for raw, p in parsed.items() if p not in found]
    if missing:
        raise NotFound(f"Genres not found: {', '.join(missing)}")

    new_genre_ids = list(dict.fromkeys(parsed[raw] for raw in requested))

    existing = TrackGenre.objects.filter(track_id=track_pk)
    previous_genre_ids = set(existing.values_list("genre_id", flat=True))
    existing.delete()

    try:
        with transaction.atomic():
            assignments = TrackGenre.objects.bulk_create([
                TrackGenre(track_id=track_pk, genre_id=genre_pk)
                for genre_pk in new_genre_ids
            ])
    except IntegrityError:
        # a concurrent assignment for the same track committed first
        raise Conflict(f"Genres of track {track_pk} were changed concurrently, retry")

    update_track_counts(previous_genre_ids | set(new_genre_ids))

    logger.info(f"Assigned {len(assignments)} genre(s) to track {track_pk}")
    return assignments


@transaction.atomic
def remove_genre_from_track(track_id, genre_id) -> None:
    track_pk = _to_uuid(track_id)
    genre_pk = _to_uuid(genre_id)

    assignment = None
    if track_pk is not None and genre_pk is not None:
        assignment = TrackGenre.objects.filter(track_id=track_pk, genre_id=genre_pk).first()

    if assignment is None:
        raise NotFound("Genre assignment not found")

    assignment.delete()
    update_track_counts([genre_pk])


# =========================================================
# TRACK COUNTS
# =========================================================

def _live_track_count():
    return Coalesce(
        Subquery(
            TrackGenre.objects
            .filter(genre=OuterRef("pk"))
            .order_by()
            .values("genre")
            .annotate(total=Count("pk"))
            .values("total"),
            output_field=IntegerField(),
        ),
        Value(0),
    )


def update_track_counts(genre_ids) -> int:
    genre_ids = list(genre_ids)
    if not genre_ids:
        return 0
    return Genre.objects.filter(pk__in=genre_ids).update(track_count=_live_track_count())


@transaction.atomic
def recalculate_all_track_counts() -> int:
    updated = Genre.objects.all().update(track_count=_live_track_count())
    logger.info(f"Recalculated track counts for {updated} genres")
    return updated
