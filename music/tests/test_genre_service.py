import uuid

import pytest
from django.db import IntegrityError

from music.exceptions import BadRequest, Conflict, NotFound
from music.models import Genre, TrackGenre
from music.services import genres as genre_service


@pytest.mark.django_db
class TestCreateGenre:
    def test_slug_is_derived_from_name(self):
        genre = genre_service.create_genre(name="Drum & Bass")

        assert genre.slug == "drum-bass"
        assert genre.track_count == 0
        assert genre.parent_id is None

    def test_duplicate_name_conflicts(self):
        genre_service.create_genre(name="Techno")

        with pytest.raises(Conflict):
            genre_service.create_genre(name="Techno")

    def test_name_match_is_case_sensitive_but_slug_still_unique(self):
        genre_service.create_genre(name="Techno")

        # different name, same slug
        with pytest.raises(Conflict) as exc:
            genre_service.create_genre(name="techno")
        assert "slug" in str(exc.value.detail)

    def test_missing_parent_is_not_found(self):
        with pytest.raises(NotFound):
            genre_service.create_genre(name="House", parent_genre_id=uuid.uuid4())

    def test_with_parent(self, make_genre):
        electronic = make_genre("Electronic")

        house = genre_service.create_genre(
            name="House",
            description="Four on the floor",
            parent_genre_id=str(electronic.pk),
        )

        assert house.parent_id == electronic.pk
        assert house.description == "Four on the floor"

    def test_name_without_word_characters_is_rejected(self):
        with pytest.raises(BadRequest):
            genre_service.create_genre(name="&&&")


@pytest.mark.django_db
class TestUpdateGenre:
    def test_rename_regenerates_slug(self, make_genre):
        genre = make_genre("Hip Hop")

        updated = genre_service.update_genre(genre.pk, {"name": "Hip-Hop Classics"})

        assert updated.name == "Hip-Hop Classics"
        assert updated.slug == "hip-hop-classics"

    def test_rename_to_taken_name_conflicts(self, make_genre):
        make_genre("Rock")
        genre = make_genre("Metal")

        with pytest.raises(Conflict):
            genre_service.update_genre(genre.pk, {"name": "Rock"})

    def test_rename_to_own_name_is_noop(self, make_genre):
        genre = make_genre("Rock")

        updated = genre_service.update_genre(genre.pk, {"name": "Rock", "description": "Loud"})

        assert updated.slug == "rock"
        assert updated.description == "Loud"

    def test_self_parent_is_rejected(self, make_genre):
        genre = make_genre("Jazz")

        with pytest.raises(BadRequest):
            genre_service.update_genre(genre.pk, {"parent_genre_id": genre.pk})

    def test_missing_parent_is_not_found(self, make_genre):
        genre = make_genre("Jazz")

        with pytest.raises(NotFound):
            genre_service.update_genre(genre.pk, {"parent_genre_id": uuid.uuid4()})

    def test_descendant_parent_is_rejected_and_link_unchanged(self, make_genre):
        electronic = make_genre("Electronic")
        house = make_genre("House", parent=electronic)
        deep_house = make_genre("Deep House", parent=house)

        with pytest.raises(BadRequest):
            genre_service.update_genre(electronic.pk, {"parent_genre_id": deep_house.pk})

        electronic.refresh_from_db()
        assert electronic.parent_id is None

    def test_move_to_unrelated_branch(self, make_genre):
        electronic = make_genre("Electronic")
        jazz = make_genre("Jazz")
        fusion = make_genre("Fusion", parent=electronic)

        updated = genre_service.update_genre(fusion.pk, {"parent_genre_id": jazz.pk})

        assert updated.parent_id == jazz.pk

    def test_null_parent_detaches_to_root(self, make_genre):
        rock = make_genre("Rock")
        punk = make_genre("Punk", parent=rock)

        updated = genre_service.update_genre(punk.pk, {"parent_genre_id": None})

        assert updated.parent_id is None

    def test_unknown_genre_is_not_found(self):
        with pytest.raises(NotFound):
            genre_service.update_genre(uuid.uuid4(), {"name": "Nope"})


@pytest.mark.django_db
class TestRemoveGenre:
    def test_blocked_by_children(self, make_genre):
        rock = make_genre("Rock")
        make_genre("Punk", parent=rock)

        with pytest.raises(BadRequest):
            genre_service.remove_genre(rock.pk)

    def test_blocked_by_live_assignments_even_if_cache_is_zero(self, make_genre, make_track):
        genre = make_genre("Rock")
        TrackGenre.objects.create(track=make_track(), genre=genre)
        assert Genre.objects.get(pk=genre.pk).track_count == 0

        with pytest.raises(BadRequest):
            genre_service.remove_genre(genre.pk)

    def test_removes_leaf_genre(self, make_genre):
        genre = make_genre("Polka")

        genre_service.remove_genre(genre.pk)

        with pytest.raises(NotFound):
            genre_service.find_one(genre.pk)


@pytest.mark.django_db
class TestTrackAssignments:
    def test_assign_replaces_set_and_counts(self, make_genre, make_track):
        rock, pop, jazz = make_genre("Rock"), make_genre("Pop"), make_genre("Jazz")
        track = make_track()
        other = make_track()
        genre_service.assign_genres_to_track(other.pk, [rock.pk])

        genre_service.assign_genres_to_track(track.pk, [rock.pk, jazz.pk])
        genre_service.assign_genres_to_track(track.pk, [rock.pk, pop.pk])

        assigned = {g.pk for g in genre_service.get_track_genres(track.pk)}
        assert assigned == {rock.pk, pop.pk}

        for genre in (rock, pop, jazz):
            genre.refresh_from_db()
            assert genre.track_count == TrackGenre.objects.filter(genre=genre).count()
        assert (rock.track_count, pop.track_count, jazz.track_count) == (2, 1, 0)

    def test_duplicate_ids_collapse(self, make_genre, make_track):
        rock = make_genre("Rock")
        track = make_track()

        assignments = genre_service.assign_genres_to_track(track.pk, [rock.pk, str(rock.pk)])

        assert len(assignments) == 1
        rock.refresh_from_db()
        assert rock.track_count == 1

    def test_missing_track_is_not_found(self):
        with pytest.raises(NotFound):
            genre_service.assign_genres_to_track("t1", ["missing-id"])

    def test_missing_genres_are_named(self, make_genre, make_track):
        rock = make_genre("Rock")
        track = make_track()
        ghost = str(uuid.uuid4())

        with pytest.raises(NotFound) as exc:
            genre_service.assign_genres_to_track(track.pk, [rock.pk, "missing-id", ghost])

        assert "missing-id" in str(exc.value.detail)
        assert ghost in str(exc.value.detail)
        assert not TrackGenre.objects.filter(track=track).exists()

    def test_concurrent_assignment_conflicts_and_keeps_previous_set(
        self, monkeypatch, make_genre, make_track
    ):
        rock, pop = make_genre("Rock"), make_genre("Pop")
        track = make_track()
        genre_service.assign_genres_to_track(track.pk, [rock.pk])

        def racing_bulk_create(*args, **kwargs):
            raise IntegrityError("duplicate key value violates unique constraint \"track_genre_unique\"")

        monkeypatch.setattr(TrackGenre.objects, "bulk_create", racing_bulk_create)

        with pytest.raises(Conflict):
            genre_service.assign_genres_to_track(track.pk, [pop.pk])

        assert list(TrackGenre.objects.filter(track=track).values_list("genre_id", flat=True)) == [rock.pk]
        rock.refresh_from_db()
        assert rock.track_count == 1

    def test_empty_set_clears_track(self, make_genre, make_track):
        rock = make_genre("Rock")
        track = make_track()
        genre_service.assign_genres_to_track(track.pk, [rock.pk])

        genre_service.assign_genres_to_track(track.pk, [])

        rock.refresh_from_db()
        assert rock.track_count == 0
        assert genre_service.get_track_genres(track.pk) == []

    def test_remove_genre_from_track(self, make_genre, make_track):
        rock, pop = make_genre("Rock"), make_genre("Pop")
        track = make_track()
        genre_service.assign_genres_to_track(track.pk, [rock.pk, pop.pk])

        genre_service.remove_genre_from_track(track.pk, rock.pk)

        rock.refresh_from_db()
        assert rock.track_count == 0
        assert [g.pk for g in genre_service.get_track_genres(track.pk)] == [pop.pk]

    def test_remove_missing_assignment_is_not_found(self, make_genre, make_track):
        with pytest.raises(NotFound):
            genre_service.remove_genre_from_track(make_track().pk, make_genre("Rock").pk)

    def test_recalculate_all_track_counts(self, make_genre, make_track):
        rock, pop = make_genre("Rock"), make_genre("Pop")
        track = make_track()
        TrackGenre.objects.create(track=track, genre=rock)
        Genre.objects.filter(pk=pop.pk).update(track_count=7)

        updated = genre_service.recalculate_all_track_counts()

        assert updated == 2
        rock.refresh_from_db()
        pop.refresh_from_db()
        assert (rock.track_count, pop.track_count) == (1, 0)


@pytest.mark.django_db
class TestHierarchyReads:
    def test_children_and_parent_chain(self, make_genre):
        electronic = make_genre("Electronic")
        house = make_genre("House", parent=electronic)
        techno = make_genre("Techno", parent=electronic)
        deep = make_genre("Deep House", parent=house)

        children = genre_service.get_children(electronic.pk)
        chain = genre_service.get_parent_chain(deep.pk)

        assert [g.name for g in children] == [house.name, techno.name]
        assert [g.pk for g in chain] == [electronic.pk, house.pk]
        assert genre_service.get_parent_chain(electronic.pk) == []

    def test_children_of_unknown_genre(self):
        with pytest.raises(NotFound):
            genre_service.get_children(uuid.uuid4())

    def test_popular_and_discovery_ordering(self, make_genre):
        rock = make_genre("Rock", track_count=5)
        make_genre("Alt Rock", parent=rock, track_count=5)
        jazz = make_genre("Jazz", track_count=9)
        make_genre("Ambient", track_count=0)

        popular = genre_service.get_popular(limit=3)
        discovery = genre_service.get_discovery()

        assert [g.name for g in popular] == ["Jazz", "Alt Rock", "Rock"]
        assert [g.name for g in discovery["root_genres"]] == ["Ambient", "Jazz", "Rock"]
        assert [g.name for g in discovery["all_genres"]][0] == jazz.name
        rock_entry = next(g for g in discovery["root_genres"] if g.pk == rock.pk)
        assert [c.name for c in rock_entry.children.all()] == ["Alt Rock"]

    def test_find_all_filters(self, make_genre):
        rock = make_genre("Rock")
        make_genre("Punk Rock", parent=rock)
        make_genre("Jazz")

        roots = genre_service.find_all(root_only=True)
        by_parent = genre_service.find_all(parent_id=rock.pk)
        by_name = genre_service.find_all(search="rock", limit=1)

        assert [g.name for g in roots["data"]] == ["Jazz", "Rock"]
        assert [g.name for g in by_parent["data"]] == ["Punk Rock"]
        assert by_name["total"] == 2
        assert by_name["total_pages"] == 2
        assert len(by_name["data"]) == 1

    def test_find_by_slug(self, make_genre):
        genre = make_genre("Drum & Bass")

        assert genre_service.find_by_slug("drum-bass").pk == genre.pk
        with pytest.raises(NotFound):
            genre_service.find_by_slug("nope")
