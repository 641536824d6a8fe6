"""FastAPI dependencies — resolve the container and holders from app state."""

from fastapi import Depends, Request

from museum.container import AppContainer
from museum.services.view_state import DetailViewState, ListViewState


def get_container(request: Request) -> AppContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Container not initialized")
    return container


def get_list_view_state(
    container: AppContainer = Depends(get_container),
) -> ListViewState:
    return container.list_state


def get_detail_view_state(
    container: AppContainer = Depends(get_container),
) -> DetailViewState:
    return container.detail_state
