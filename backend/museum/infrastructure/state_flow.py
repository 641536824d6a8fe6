"""State Flow — latest-value cells with conflated async subscriptions.

Invariants:
    - A StateFlow always holds exactly one current value; set() replaces it atomically
    - Setting a value equal to the current one is a no-op (no version bump, no wakeup)
    - Every Subscription replays the current value first, then yields each later value
    - Subscriptions are conflated: a slow consumer skips intermediate values and
      always receives the latest one, never a partially-updated value
    - A distinct Subscription never yields the same (selected) value twice in a row;
      a non-distinct one yields once per replacement of the underlying value
    - SharedStateFlow runs at most one upstream collection at a time
    - SharedState.emissions counts upstream values of the current collection, so
      an upstream that re-emits an equal value still publishes a new state

Design Decisions:
    - Version counter + replaceable asyncio.Event, no per-subscriber queues
    - SharedStateFlow keeps its upstream alive for stop_timeout after the last
      subscriber leaves; a re-subscribe inside that window reuses the collection
    - Upstream failure is captured as state (SharedState.error), not raised into
      the owning scope; consumers decide when to restart()
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Generic, TypeVar

from museum.infrastructure.lifecycle import LifecycleScope

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

_UNSET: Any = object()


def _identity(value):
    return value


class StateFlow(Generic[T]):
    """Single-slot observable value."""

    def __init__(self, initial: T):
        self._value = initial
        self._version = 0
        self._changed = asyncio.Event()

    @property
    def value(self) -> T:
        return self._value

    @property
    def version(self) -> int:
        """Number of distinct values set since creation."""
        return self._version

    def set(self, value: T) -> bool:
        """Replace the current value. Returns False if it was equal (no emission)."""
        if value == self._value:
            return False
        self._value = value
        self._version += 1
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()
        return True

    def subscribe(
        self,
        select: Callable[[T], Any] | None = None,
        distinct: bool = True,
    ) -> "Subscription":
        """Open a subscription, optionally mapping each value through select."""
        return Subscription(self, select=select, distinct=distinct)


class Subscription(Generic[R]):
    """Conflating async iterator over a StateFlow.

    Usable with ``async for`` directly, or as an async context manager so
    that close() runs deterministically when the consumer leaves.
    """

    def __init__(
        self,
        flow: StateFlow,
        select: Callable[[Any], R] | None = None,
        on_close: Callable[[], None] | None = None,
        distinct: bool = True,
    ):
        self._flow = flow
        self._select = select or _identity
        self._on_close = on_close
        self._distinct = distinct
        self._seen = -1
        self._last: Any = _UNSET
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "Subscription[R]":
        return self

    async def __anext__(self) -> R:
        while not self._closed:
            flow = self._flow
            if self._seen == flow.version:
                await flow._changed.wait()
                continue
            self._seen = flow.version
            item = self._select(flow.value)
            if self._distinct and self._last is not _UNSET and item == self._last:
                continue
            self._last = item
            return item
        raise StopAsyncIteration

    def close(self) -> None:
        """Detach from the flow. Idempotent; on_close runs exactly once."""
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()

    async def __aenter__(self) -> "Subscription[R]":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


@dataclass(frozen=True)
class SharedState(Generic[T]):
    """Value plus terminal upstream failure, published together.

    emissions is reset to 0 whenever a collection starts.
    """
    value: T
    error: Exception | None = None
    emissions: int = 0


class SharedStateFlow(Generic[T]):
    """Upstream async iterator shared as a StateFlow while subscribers exist.

    Starts collecting on the first subscriber, stops stop_timeout seconds
    after the last one leaves, and keeps the last value across restarts.
    """

    def __init__(
        self,
        upstream: Callable[[], AsyncIterator[T]],
        scope: LifecycleScope,
        initial: T,
        stop_timeout: float = 5.0,
        name: str = "shared",
    ):
        self.name = name
        self._upstream = upstream
        self._scope = scope
        self._stop_timeout = stop_timeout
        self._state: StateFlow[SharedState[T]] = StateFlow(SharedState(initial))
        self._subscribers = 0
        self._job: asyncio.Task | None = None
        self._stop_job: asyncio.Task | None = None

    # -- Read side -------------------------------------------------------------

    @property
    def value(self) -> T:
        return self._state.value.value

    @property
    def error(self) -> Exception | None:
        return self._state.value.error

    @property
    def state(self) -> SharedState[T]:
        return self._state.value

    @property
    def subscriber_count(self) -> int:
        return self._subscribers

    @property
    def is_active(self) -> bool:
        """True while an upstream collection is running."""
        return self._job is not None and not self._job.done()

    def subscribe(self) -> Subscription[T]:
        """Subscribe to values only; errors are visible through .error / subscribe_state()."""
        self._acquire()
        return Subscription(
            self._state, select=attrgetter("value"), on_close=self._release,
        )

    def subscribe_state(self) -> Subscription[SharedState[T]]:
        """Subscribe to value and error together."""
        self._acquire()
        return Subscription(self._state, on_close=self._release)

    # -- Control ---------------------------------------------------------------

    def restart(self) -> None:
        """Drop the current collection and error; collect again if anyone is listening."""
        self._cancel_job()
        self._state.set(SharedState(self.value))
        if self._subscribers:
            self._start()

    # -- Internals -------------------------------------------------------------

    def _acquire(self) -> None:
        self._subscribers += 1
        if self._stop_job is not None:
            self._stop_job.cancel()
            self._stop_job = None
        if self._job is None:
            self._start()

    def _release(self) -> None:
        self._subscribers -= 1
        if self._subscribers > 0 or self._job is None or self._scope.closed:
            return
        self._stop_job = self._scope.launch(
            self._stop_after_timeout(), name=f"{self.name}-stop",
        )

    def _start(self) -> None:
        self._state.set(SharedState(self.value))
        self._job = self._scope.launch(self._collect(), name=f"{self.name}-upstream")

    def _cancel_job(self) -> None:
        if self._job is not None:
            self._job.cancel()
            self._job = None

    async def _stop_after_timeout(self) -> None:
        await asyncio.sleep(self._stop_timeout)
        self._stop_job = None
        logger.debug("Stopping idle shared flow %s", self.name)
        self._cancel_job()

    async def _collect(self) -> None:
        try:
            async for value in self._upstream():
                self._state.set(
                    SharedState(value, None, self.state.emissions + 1),
                )
        except Exception as exc:
            logger.warning(
                "Upstream of %s failed: %s", self.name, exc,
                extra={"error_code": getattr(exc, "code", None)},
            )
            self._state.set(SharedState(self.value, exc, self.state.emissions))
