"""Stream Helpers — SSE formatting and holder-to-event adapters.

Invariants:
    - Every SSE line is a single `data:` JSON payload terminated by a blank line
    - Objects are rendered with the catalog's camelCase keys
    - Event generators close their subscription when the client disconnects
    - The list stream skips states whose objects and error are both unchanged

Design Decisions:
    - Adapters are async generators over holder subscriptions, so routes stay thin
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Iterable

from museum.core.domain_types import StreamEventType
from museum.core.errors import MuseumError
from museum.schemas.museum_object import MuseumObject
from museum.schemas.views import ErrorView, ListStateView
from museum.infrastructure.state_flow import SharedState
from museum.services.view_state import DetailViewState, ListViewState

logger = logging.getLogger(__name__)

# SSE headers prevent proxy/browser buffering of streamed events.
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


def error_view(exc: Exception | None) -> ErrorView | None:
    """Map a holder failure to its user-facing shape; unknown errors stay opaque."""
    if exc is None:
        return None
    if isinstance(exc, MuseumError):
        event = exc.to_sse_event()["data"]
        return ErrorView(
            code=event["code"], message=event["message"],
            recoverable=event["recoverable"],
        )
    return ErrorView(
        code="INTERNAL_ERROR", message="An unexpected error occurred",
        recoverable=False,
    )


def list_state_view(
    objects: Iterable[MuseumObject], error: Exception | None = None,
) -> ListStateView:
    return ListStateView(objects=list(objects), error=error_view(error))


async def settled_list_state(
    holder: ListViewState, timeout: float,
) -> SharedState:
    """First settled list state; the current state on timeout.

    An empty replay of a cold cache is skipped, so the caller waits for the
    fetch to finish. An empty catalog settles as soon as that fetch completes.
    """
    async with holder.objects.subscribe_state() as states:
        try:
            async with asyncio.timeout(timeout):
                async for state in states:
                    if ListViewState.is_settled(state):
                        return state
        except TimeoutError:
            logger.warning("List state did not settle within %.1fs", timeout)
    return holder.objects.state


def objects_event(state: ListStateView) -> dict:
    return {
        "type": StreamEventType.OBJECTS.value,
        "data": state.model_dump(mode="json", by_alias=True),
    }


def object_event(obj: MuseumObject | None) -> dict:
    return {
        "type": StreamEventType.OBJECT.value,
        "data": obj.model_dump(mode="json", by_alias=True) if obj else None,
    }


async def list_state_events(holder: ListViewState) -> AsyncIterator[str]:
    """SSE lines for every list state change until the client leaves."""
    last = None
    try:
        async with holder.objects.subscribe_state() as states:
            async for state in states:
                if (state.value, state.error) == last:
                    continue
                last = (state.value, state.error)
                yield sse_line(objects_event(list_state_view(state.value, state.error)))
    except asyncio.CancelledError:
        logger.info("Client disconnected from list stream")
        raise


async def object_events(
    holder: DetailViewState, object_id: int,
) -> AsyncIterator[str]:
    """SSE lines for one object (null while absent) until the client leaves."""
    try:
        async for obj in holder.get_object(object_id):
            yield sse_line(object_event(obj))
    except asyncio.CancelledError:
        logger.info(
            "Client disconnected from object stream", extra={"object_id": object_id},
        )
        raise
