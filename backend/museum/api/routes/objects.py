"""Museum Object Routes — list and detail rendering over the view-state holders.

Invariants:
    - GET /objects returns once the list holds objects, an error or a completed
      fetch (bounded by the HTTP timeout), never the empty replay of a cold cache
    - GET /objects/{id} answers from the cache only; absent ids are 404
    - POST /objects/refresh is the manual retry: it re-runs the list flow
    - Stream endpoints hold a subscription for as long as the client stays connected
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from museum.api.dependencies import (
    get_container,
    get_detail_view_state,
    get_list_view_state,
)
from museum.api.routes.stream_helpers import (
    SSE_HEADERS,
    list_state_events,
    list_state_view,
    object_events,
    settled_list_state,
)
from museum.container import AppContainer
from museum.core.domain_types import ObjectId
from museum.core.errors import ObjectNotFoundError
from museum.schemas.museum_object import MuseumObject
from museum.schemas.views import ListStateView, RefreshAccepted
from museum.services.view_state import DetailViewState, ListViewState

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/objects", tags=["objects"])


@router.get("", response_model=ListStateView)
async def list_objects(
    holder: ListViewState = Depends(get_list_view_state),
    container: AppContainer = Depends(get_container),
):
    """Current list state, loading it first if the cache is cold."""
    state = await settled_list_state(
        holder, container.settings.http_timeout_seconds,
    )
    return list_state_view(state.value, state.error)


@router.get("/stream")
async def stream_objects(holder: ListViewState = Depends(get_list_view_state)):
    """SSE stream of list states."""
    return StreamingResponse(
        list_state_events(holder),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post(
    "/refresh",
    response_model=RefreshAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def refresh_objects(holder: ListViewState = Depends(get_list_view_state)):
    """Manual retry after a failed load."""
    holder.retry()
    return RefreshAccepted()


@router.get("/{object_id}", response_model=MuseumObject)
async def get_object(
    object_id: int, holder: DetailViewState = Depends(get_detail_view_state),
):
    """Object detail from the cached snapshot."""
    obj = await anext(holder.get_object(ObjectId(object_id)))
    if obj is None:
        raise ObjectNotFoundError(object_id)
    return obj


@router.get("/{object_id}/stream")
async def stream_object(
    object_id: int, holder: DetailViewState = Depends(get_detail_view_state),
):
    """SSE stream of one object; null until the cache contains it."""
    return StreamingResponse(
        object_events(holder, ObjectId(object_id)),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
