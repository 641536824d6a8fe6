"""Composition Root — constructs and wires every component at process start.

Invariants:
    - Components receive collaborators by constructor; nothing else builds them
    - One cache, one repository and one app scope per container
    - close() tears down holders first, then the app scope, then the HTTP client
    - Only open holders are tracked; closed ones are pruned when a holder is created

Design Decisions:
    - Plain dataclass over a service locator: the dependency graph is static and small
    - The HTTP surface shares one ListViewState, so concurrent clients share a single
      upstream collection while the keep-alive window holds
"""

import logging
from dataclasses import dataclass, field

import httpx

from museum.config import Settings
from museum.infrastructure.lifecycle import LifecycleScope
from museum.infrastructure.museum_api import HttpMuseumApi
from museum.infrastructure.museum_storage import InMemoryMuseumStorage
from museum.core.repository_protocols import MuseumApi
from museum.services.museum_repository import MuseumRepository
from museum.services.view_state import DetailViewState, ListViewState, ViewStateHolder

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    settings: Settings
    api: MuseumApi
    storage: InMemoryMuseumStorage
    repository: MuseumRepository
    scope: LifecycleScope
    list_state: ListViewState
    detail_state: DetailViewState
    _holders: list[ViewStateHolder] = field(default_factory=list)

    def list_view_state(self) -> ListViewState:
        """New list holder owned by the caller (closed with the container as a fallback)."""
        return self._track(ListViewState(
            self.repository, stop_timeout_ms=self.settings.list_stop_timeout_ms,
        ))

    def detail_view_state(self) -> DetailViewState:
        return self._track(DetailViewState(self.repository))

    def _track(self, holder):
        # holders closed by their owner are dropped here, not at container close
        self._holders = [h for h in self._holders if not h.closed]
        self._holders.append(holder)
        return holder

    async def close(self) -> None:
        for holder in reversed(self._holders):
            await holder.close()
        await self.scope.close()
        aclose = getattr(self.api, "aclose", None)
        if aclose is not None:
            await aclose()
        logger.info("Container closed")


def build_container(
    settings: Settings,
    api: MuseumApi | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContainer:
    """Wire the object graph. Pass api or transport to replace the network."""
    api = api or HttpMuseumApi(
        settings.museum_api_url,
        timeout_seconds=settings.http_timeout_seconds,
        transport=transport,
    )
    storage = InMemoryMuseumStorage()
    repository = MuseumRepository(api, storage)
    list_state = ListViewState(
        repository, stop_timeout_ms=settings.list_stop_timeout_ms,
    )
    detail_state = DetailViewState(repository)
    return AppContainer(
        settings=settings,
        api=api,
        storage=storage,
        repository=repository,
        scope=LifecycleScope("app"),
        list_state=list_state,
        detail_state=detail_state,
        _holders=[list_state, detail_state],
    )
