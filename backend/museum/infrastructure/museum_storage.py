"""In-Memory Museum Storage — the single current catalog snapshot.

Invariants:
    - At most one snapshot is current; write() replaces it atomically
    - read() replays the current snapshot to every new subscriber, then re-emits
      on every replacement; it never terminates on its own
    - lookup(id) re-emits on every snapshot replacement (even when the object is
      unchanged) and emits None when absent
    - No eviction, no size bound, no TTL; process restart loses everything
"""

import logging
from collections.abc import Sequence

from museum.core.domain_types import EMPTY_SNAPSHOT, ObjectId
from museum.core.snapshot import find_object, freeze_snapshot
from museum.infrastructure.state_flow import StateFlow, Subscription
from museum.schemas.museum_object import MuseumObject

logger = logging.getLogger(__name__)


class InMemoryMuseumStorage:
    """Latest-value cache of the catalog listing."""

    def __init__(self):
        self._objects: StateFlow[tuple[MuseumObject, ...]] = StateFlow(EMPTY_SNAPSHOT)

    @property
    def snapshot(self) -> tuple[MuseumObject, ...]:
        return self._objects.value

    def read(self) -> Subscription[tuple[MuseumObject, ...]]:
        return self._objects.subscribe()

    def write(self, objects: Sequence[MuseumObject]) -> None:
        snapshot = freeze_snapshot(objects)
        if self._objects.set(snapshot):
            logger.debug("Cache snapshot replaced", extra={"count": len(snapshot)})

    def lookup(self, object_id: ObjectId) -> Subscription[MuseumObject | None]:
        return self._objects.subscribe(
            select=lambda snapshot: find_object(snapshot, object_id),
            distinct=False,
        )
