import pytest
from django.core.cache import cache
from django.core.management import call_command

from music.models import Genre, TrackGenre
from music.tasks.genre_tasks import recalculate_genre_track_counts
from utils.locks import ResourceLock


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.mark.django_db
def test_recalculate_task_repairs_counts(make_genre, make_track):
    rock = make_genre("Rock", track_count=9)
    TrackGenre.objects.create(track=make_track(), genre=rock)

    updated = recalculate_genre_track_counts()

    assert updated == 1
    rock.refresh_from_db()
    assert rock.track_count == 1


@pytest.mark.django_db
def test_recalculate_task_skips_when_locked(make_genre):
    rock = make_genre("Rock", track_count=9)

    with ResourceLock("genre_track_counts", "all"):
        result = recalculate_genre_track_counts()

    assert result is None
    rock.refresh_from_db()
    assert rock.track_count == 9


@pytest.mark.django_db
def test_seed_genres_builds_hierarchy_once():
    call_command("seed_genres")
    seeded = Genre.objects.count()
    call_command("seed_genres")

    assert Genre.objects.count() == seeded
    assert Genre.objects.roots().count() == 20
    drum_bass = Genre.objects.get(slug="drum-bass")
    assert drum_bass.parent.name == "Electronic"
    assert Genre.objects.get(name="R&B").slug == "rb"
