"""Museum Repository — coordinates the catalog API and the snapshot cache.

Invariants:
    - get_objects() emits the cached snapshot first, then fetches, writes the
      result into the cache and keeps re-emitting cache snapshots
    - Cold start yields at most two emissions: stale-or-empty, then fresh
    - The fresh snapshot is emitted after every successful fetch, even when it
      equals the stale one, so consumers can tell the fetch finished
    - A fetch failure terminates that subscription after the stale value was delivered
    - get_object_by_id() never triggers a fetch
    - The repository never touches cache internals, only read/write/lookup

Design Decisions:
    - No de-duplication: every get_objects() subscription performs its own fetch;
      concurrent writers race and the last write wins
    - Failures are not swallowed in get_objects(): the list view state decides how
      to present them and when to retry
"""

import logging
from collections.abc import AsyncIterator

from museum.core.domain_types import ObjectId
from museum.core.errors import MuseumError
from museum.core.repository_protocols import MuseumApi, MuseumStorage
from museum.infrastructure.lifecycle import LifecycleScope
from museum.schemas.museum_object import MuseumObject

logger = logging.getLogger(__name__)


class MuseumRepository:
    """Serves cached catalog snapshots and refreshes them from the network."""

    def __init__(self, api: MuseumApi, storage: MuseumStorage):
        self._api = api
        self._storage = storage

    async def refresh(self) -> None:
        """Fetch once and replace the cached snapshot. Errors propagate."""
        objects = await self._api.fetch_objects()
        self._storage.write(objects)
        logger.info("Catalog cache refreshed", extra={"count": len(objects)})

    def initialize(self, scope: LifecycleScope):
        """Warm the cache in the background; a failure leaves the cache untouched."""
        return scope.launch(self._prefetch(), name="catalog-prefetch")

    async def get_objects(self) -> AsyncIterator[tuple[MuseumObject, ...]]:
        yield await anext(self._storage.read())
        await self.refresh()
        # a new reader replays the fresh snapshot even if the write was a no-op
        async for snapshot in self._storage.read():
            yield snapshot

    def get_object_by_id(
        self, object_id: ObjectId,
    ) -> AsyncIterator[MuseumObject | None]:
        return self._storage.lookup(object_id)

    async def _prefetch(self) -> None:
        try:
            await self.refresh()
        except MuseumError as exc:
            logger.warning(
                "Catalog prefetch failed: %s", exc.message,
                extra={"error_code": exc.code},
            )
