"""Snapshot Helpers — lookup and freezing of cached listings."""

from museum.core.domain_types import ObjectId
from museum.core.snapshot import find_object, freeze_snapshot

from tests.fake_museum_api import museum_object


def test_find_object_returns_match():
    snapshot = (museum_object(1), museum_object(5), museum_object(9))
    found = find_object(snapshot, ObjectId(5))
    assert found is not None
    assert found.object_id == 5


def test_find_object_returns_none_when_absent():
    snapshot = (museum_object(1),)
    assert find_object(snapshot, ObjectId(999)) is None


def test_find_object_in_empty_snapshot():
    assert find_object((), ObjectId(1)) is None


def test_find_object_returns_first_duplicate():
    first = museum_object(3, "First")
    snapshot = (first, museum_object(3, "Second"))
    assert find_object(snapshot, ObjectId(3)) is first


def test_freeze_snapshot_copies_into_tuple():
    objects = [museum_object(1), museum_object(2)]
    snapshot = freeze_snapshot(objects)
    objects.append(museum_object(3))
    assert isinstance(snapshot, tuple)
    assert [o.object_id for o in snapshot] == [1, 2]
