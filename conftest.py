import itertools

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from music.models import Artist, Genre, Track

User = get_user_model()

_seq = itertools.count(1)


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email="test@test.com",
        username="tester",
        password="test123"
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email="staff@test.com",
        username="staff",
        password="test123",
        is_staff=True,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def make_genre(db):
    def _make(name=None, parent=None, **fields):
        name = name or f"Genre {next(_seq)}"
        return Genre.objects.create(name=name, parent=parent, **fields)
    return _make


@pytest.fixture
def make_artist(db):
    def _make(name=None, **fields):
        return Artist.objects.create(name=name or f"Artist {next(_seq)}", **fields)
    return _make


@pytest.fixture
def make_track(db, make_artist):
    def _make(title=None, artist=None, **fields):
        fields.setdefault("is_public", True)
        return Track.objects.create(
            title=title or f"Track {next(_seq)}",
            artist=artist or make_artist(),
            **fields,
        )
    return _make
