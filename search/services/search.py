import logging
import math
import re

from django.conf import settings
from django.contrib.postgres.search import SearchQuery, SearchRank, TrigramSimilarity
from django.db import connection
from django.db.models import F, FloatField, Q, Value
from django.db.models.functions import Coalesce, Greatest

from music.models import Artist, Track
from utils.pagination import clamp_page, paginate

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.1
FUZZY_WEIGHT = 0.5

SEARCH_TYPES = ("artist", "track")
SORT_OPTIONS = (
    "relevance",
    "recent",
    "popular",
    "alphabetical",
    "popular_tips",
    "popular_plays",
)

SUGGESTION_MIN_LENGTH = 2
SUGGESTION_DEFAULT_LIMIT = 10
SUGGESTION_MAX_LIMIT = 20


# =========================================================
# QUERY TEXT
# =========================================================

def sanitize_query(q) -> str:
    """Keep letters, digits and whitespace; collapse whitespace."""
    if not q:
        return ""
    cleaned = re.sub(r"[^\w\s]|_", " ", q)
    return re.sub(r"\s+", " ", cleaned).strip()


def build_tsquery(q) -> str:
    """
    "deep hou" -> "deep & hou:*": every token required, the last one
    prefix-matched so results follow the user while typing.
    """
    tokens = sanitize_query(q).split()
    if not tokens:
        return ""
    tokens[-1] = f"{tokens[-1]}:*"
    return " & ".join(tokens)


def supports_fulltext() -> bool:
    """tsvector / pg_trgm matching is only available on PostgreSQL"""
    return connection.vendor == "postgresql"


# =========================================================
# MATCHING
# =========================================================

def _substring_filter(fields, text) -> Q:
    condition = Q()
    for field in fields:
        condition |= Q(**{f"{field}__icontains": text})
    return condition


def _apply_text_match(qs, q, ts_query, primary, secondary, fallback_fields):
    """
    Returns (queryset, ranked). `ranked` is True when the queryset carries
    a `relevance` annotation usable for ordering.
    """
    if not ts_query or not supports_fulltext():
        return qs.filter(_substring_filter(fallback_fields, q)), False

    query = SearchQuery(ts_query, search_type="raw", config=settings.SEARCH_TEXT_CONFIG)
    similarities = {
        f"{field}_similarity": Coalesce(
            TrigramSimilarity(field, q), Value(0.0), output_field=FloatField()
        )
        for field in [primary, *secondary]
    }

    qs = qs.annotate(
        text_rank=SearchRank(F("search_vector"), query, cover_density=True),
        **similarities,
    )

    match = Q(search_vector=query)
    for alias in similarities:
        match |= Q(**{f"{alias}__gt": SIMILARITY_THRESHOLD})

    qs = qs.filter(match).annotate(
        relevance=F("text_rank") + Value(FUZZY_WEIGHT) * Greatest(
            *[F(alias) for alias in similarities],
            Value(0.0),
            output_field=FloatField(),
        ),
    )
    return qs, True


# =========================================================
# SORTING
# =========================================================

ARTIST_ORDERINGS = {
    "recent": ["-created_at"],
    "popular": ["-total_tips_received"],
    "popular_tips": ["-total_tips_received"],
    "alphabetical": ["name"],
}

TRACK_ORDERINGS = {
    "recent": ["-created_at"],
    "popular": ["-tip_count", "-total_tips"],
    "popular_tips": ["-tip_count", "-total_tips"],
    "popular_plays": ["-plays"],
    "alphabetical": ["title"],
}


def _order(qs, orderings, sort, ranked):
    ordering = orderings.get(sort)
    if ordering is None:
        # relevance, and any sort this entity type does not know
        ordering = ["-relevance"] if ranked else ["-created_at"]
    return qs.order_by(*ordering, "pk")


# =========================================================
# SEARCH
# =========================================================

def search_artists(q=None, genre=None, sort="relevance", page=1, limit=10, **_) -> dict:
    text = sanitize_query(q)
    qs = Artist.objects.all()
    ranked = False

    if text:
        qs, ranked = _apply_text_match(
            qs,
            text,
            build_tsquery(text),
            primary="name",
            secondary=["genre"],
            fallback_fields=["name", "genre", "bio"],
        )

    if genre:
        qs = qs.filter(genre__icontains=genre)

    qs = _order(qs, ARTIST_ORDERINGS, sort, ranked)
    return paginate(qs, page, limit)


def search_tracks(
    q=None,
    genre=None,
    release_date_from=None,
    release_date_to=None,
    sort="relevance",
    page=1,
    limit=10,
    **_,
) -> dict:
    text = sanitize_query(q)
    qs = Track.objects.select_related("artist").filter(is_public=True)
    ranked = False

    if text:
        qs, ranked = _apply_text_match(
            qs,
            text,
            build_tsquery(text),
            primary="title",
            secondary=["genre", "description"],
            fallback_fields=["title", "genre", "description"],
        )

    if genre:
        qs = qs.filter(genre__icontains=genre)
    if release_date_from:
        qs = qs.filter(release_date__gte=release_date_from)
    if release_date_to:
        qs = qs.filter(release_date__lte=release_date_to)

    qs = _order(qs, TRACK_ORDERINGS, sort, ranked)
    return paginate(qs, page, limit)


def search(type=None, **params) -> dict:
    """
    Searches artists and/or tracks. A key is only present in the result
    when its entity type was searched.
    """
    params["page"], params["limit"] = clamp_page(params.get("page"), params.get("limit"))
    params["sort"] = params.get("sort") or "relevance"

    types = [type] if type else list(SEARCH_TYPES)
    result = {}

    if "artist" in types:
        result["artists"] = search_artists(**params)
    if "track" in types:
        result["tracks"] = search_tracks(**params)

    logger.debug(f"Search q={params.get('q')!r} types={types} sort={params['sort']}")
    return result


# =========================================================
# SUGGESTIONS
# =========================================================

def _artist_suggestion(artist) -> dict:
    return {
        "type": "artist",
        "id": artist.id,
        "title": artist.name,
        "subtitle": artist.genre or None,
    }


def _track_suggestion(track) -> dict:
    parts = [track.genre, track.artist.name if track.artist else None]
    return {
        "type": "track",
        "id": track.id,
        "title": track.title,
        "subtitle": " · ".join(p for p in parts if p) or None,
    }


def get_suggestions(q, type=None, limit=SUGGESTION_DEFAULT_LIMIT) -> dict:
    result = {"artists": [], "tracks": []}

    text = sanitize_query(q)
    if len(text) < SUGGESTION_MIN_LENGTH:
        return result

    _, limit = clamp_page(1, limit, SUGGESTION_DEFAULT_LIMIT, SUGGESTION_MAX_LIMIT)
    take = limit if type else math.ceil(limit / 2)

    if type in (None, "artist"):
        artists = (
            Artist.objects
            .filter(_substring_filter(["name", "genre"], text))
            .only("id", "name", "genre")
            .order_by("name", "pk")[:take]
        )
        result["artists"] = [_artist_suggestion(a) for a in artists]

    if type in (None, "track"):
        tracks = (
            Track.objects
            .filter(is_public=True)
            .filter(_substring_filter(["title", "genre"], text))
            .select_related("artist")
            .only("id", "title", "genre", "artist__id", "artist__name")
            .order_by("title", "pk")[:take]
        )
        result["tracks"] = [_track_suggestion(t) for t in tracks]

    return result
