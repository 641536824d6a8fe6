"""View State Holders — lifecycle-scoped adapters between the repository and a UI surface.

Invariants:
    - Each holder owns one LifecycleScope; close() cancels everything it started
    - ListViewState.objects starts lazily, defaults to the empty tuple, and stays
      active for stop_timeout_ms after its last subscriber leaves
    - ListViewState keeps the last objects after an upstream failure; the failure
      is exposed via .error until retry() or a fresh start
    - A list state is settled once it holds objects, an error, or the result of a
      completed fetch (which may be an empty catalog)
    - DetailViewState adds no buffering and no default: it yields None until the
      cache contains the object
"""

import logging
from collections.abc import AsyncIterator

from museum.core.domain_types import EMPTY_SNAPSHOT, ObjectId
from museum.infrastructure.lifecycle import LifecycleScope
from museum.infrastructure.state_flow import SharedState, SharedStateFlow
from museum.schemas.museum_object import MuseumObject
from museum.services.museum_repository import MuseumRepository

logger = logging.getLogger(__name__)


class ViewStateHolder:
    """Base holder: owns a scope, torn down with close()."""

    def __init__(self, name: str):
        self.scope = LifecycleScope(name)

    @property
    def closed(self) -> bool:
        return self.scope.closed

    async def close(self) -> None:
        await self.scope.close()


class ListViewState(ViewStateHolder):
    """Shared list of catalog objects for the listing surface."""

    def __init__(self, repository: MuseumRepository, stop_timeout_ms: int = 5000):
        super().__init__("list-view-state")
        self.objects: SharedStateFlow[tuple[MuseumObject, ...]] = SharedStateFlow(
            repository.get_objects,
            self.scope,
            EMPTY_SNAPSHOT,
            stop_timeout=stop_timeout_ms / 1000,
            name="objects",
        )

    @property
    def error(self) -> Exception | None:
        return self.objects.error

    @staticmethod
    def is_settled(state: SharedState) -> bool:
        """True once state reflects a finished load rather than the replayed cache.

        The repository stream emits the cached snapshot, then the fetched one, so
        a second emission means the fetch completed even if both were empty.
        """
        if state.error is not None or state.emissions >= 2:
            return True
        return state.emissions == 1 and bool(state.value)

    def retry(self) -> None:
        """Manual retry: clear the error and re-run the repository stream."""
        logger.info("List retry requested")
        self.objects.restart()


class DetailViewState(ViewStateHolder):
    """Per-object detail lookups for the detail surface."""

    def __init__(self, repository: MuseumRepository):
        super().__init__("detail-view-state")
        self._repository = repository

    def get_object(self, object_id: ObjectId) -> AsyncIterator[MuseumObject | None]:
        return self._repository.get_object_by_id(object_id)
