"""Snapshot Helpers — pure functions over cached museum object listings.

Invariants:
    - Functions never mutate their input; a snapshot is always a fresh tuple
    - find_object returns the first match in listing order, or None
"""

from collections.abc import Iterable

from museum.core.domain_types import ObjectId
from museum.schemas.museum_object import MuseumObject


def freeze_snapshot(objects: Iterable[MuseumObject]) -> tuple[MuseumObject, ...]:
    """Copy any iterable of objects into an immutable snapshot."""
    return tuple(objects)


def find_object(
    snapshot: Iterable[MuseumObject], object_id: ObjectId,
) -> MuseumObject | None:
    for obj in snapshot:
        if obj.object_id == object_id:
            return obj
    return None

