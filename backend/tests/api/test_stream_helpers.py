"""Stream Helpers — SSE formatting and holder-to-event adapters.

Tests cover:
    - sse_line wire format
    - list_state_events emits the default state, then fresh objects
    - list_state_events skips states with unchanged objects and error
    - object_events emits null until the object is cached
    - error_view never leaks unknown exception details
"""

import asyncio
import json
from contextlib import aclosing

from museum.api.routes.stream_helpers import (
    error_view,
    list_state_events,
    object_events,
    sse_line,
)
from museum.core.errors import NetworkError
from museum.infrastructure.museum_storage import InMemoryMuseumStorage
from museum.services.museum_repository import MuseumRepository
from museum.services.view_state import DetailViewState, ListViewState

from tests.fake_museum_api import FakeMuseumApi, museum_object, until


def _payload(line: str) -> dict:
    assert line.startswith("data: ") and line.endswith("\n\n")
    return json.loads(line[len("data: "):])


def test_sse_line_format():
    line = sse_line({"type": "objects", "data": {"objects": []}})
    assert line == 'data: {"type": "objects", "data": {"objects": []}}\n\n'


def test_error_view_for_domain_error():
    view = error_view(NetworkError("HTTP 502", status_code=502))
    assert view.code == "NETWORK_ERROR"
    assert view.recoverable is True


def test_error_view_hides_unknown_errors():
    view = error_view(RuntimeError("secret stack detail"))
    assert view.code == "INTERNAL_ERROR"
    assert "secret" not in view.message


def test_error_view_none():
    assert error_view(None) is None


async def test_list_state_events_stream_default_then_fresh():
    repo = MuseumRepository(
        FakeMuseumApi([[museum_object(1, "Bowl")]]), InMemoryMuseumStorage(),
    )
    holder = ListViewState(repo)

    async with aclosing(list_state_events(holder)) as events:
        first = _payload(await anext(events))
        second = _payload(await asyncio.wait_for(anext(events), 1))

    assert first == {"type": "objects", "data": {"objects": [], "error": None}}
    assert second["data"]["objects"][0]["objectID"] == 1
    assert second["data"]["objects"][0]["title"] == "Bowl"
    assert holder.objects.subscriber_count == 0
    await holder.close()


async def test_list_state_events_skip_unchanged_states():
    storage = InMemoryMuseumStorage()
    holder = ListViewState(MuseumRepository(FakeMuseumApi([[]]), storage))

    async with aclosing(list_state_events(holder)) as events:
        first = _payload(await anext(events))
        await until(lambda: holder.objects.state.emissions == 2)
        storage.write([museum_object(4)])
        second = _payload(await asyncio.wait_for(anext(events), 1))

    assert first["data"]["objects"] == []
    assert [o["objectID"] for o in second["data"]["objects"]] == [4]
    await holder.close()


async def test_list_state_events_include_error():
    repo = MuseumRepository(
        FakeMuseumApi([NetworkError("down")]), InMemoryMuseumStorage(),
    )
    holder = ListViewState(repo)

    async with aclosing(list_state_events(holder)) as events:
        await anext(events)
        failed = _payload(await asyncio.wait_for(anext(events), 1))

    assert failed["data"]["error"]["code"] == "NETWORK_ERROR"
    await holder.close()


async def test_object_events_null_until_cached():
    storage = InMemoryMuseumStorage()
    holder = DetailViewState(MuseumRepository(FakeMuseumApi(), storage))

    async with aclosing(object_events(holder, 3)) as events:
        assert _payload(await anext(events)) == {"type": "object", "data": None}
        storage.write([museum_object(3, "Mirror")])
        cached = _payload(await asyncio.wait_for(anext(events), 1))

    assert cached["data"]["title"] == "Mirror"
    await holder.close()
