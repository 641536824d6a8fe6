"""Composition Root — wiring and teardown order."""

import httpx

from museum.config import Settings
from museum.container import build_container
from museum.infrastructure.museum_api import HttpMuseumApi

from tests.fake_museum_api import FakeMuseumApi, museum_object, until


def _settings(**overrides):
    return Settings(
        _env_file=None,
        museum_api_url="http://catalog.test/list.json",
        **overrides,
    )


async def test_default_wiring_uses_http_api():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json=[{"objectID": 1, "title": "Bowl"}]),
    )
    container = build_container(_settings(), transport=transport)
    assert isinstance(container.api, HttpMuseumApi)

    await container.repository.refresh()
    assert [o.object_id for o in container.storage.snapshot] == [1]

    await container.close()
    assert container.api.client.is_closed


async def test_holders_share_repository_and_cache():
    api = FakeMuseumApi([[museum_object(2)]])
    container = build_container(_settings(), api=api)

    holder = container.list_view_state()
    async with holder.objects.subscribe():
        await until(lambda: holder.objects.value != ())

    detail = container.detail_view_state()
    found = await anext(detail.get_object(2))
    assert found.object_id == 2
    assert container.storage.snapshot == holder.objects.value
    await container.close()


async def test_list_view_state_uses_configured_stop_timeout():
    container = build_container(
        _settings(list_stop_timeout_ms=250), api=FakeMuseumApi(),
    )
    holder = container.list_view_state()
    assert holder.objects._stop_timeout == 0.25
    await container.close()


async def test_close_tears_down_holders_scope_and_api():
    api = FakeMuseumApi([[museum_object(1)]])
    container = build_container(_settings(), api=api)
    extra = container.list_view_state()
    extra.objects.subscribe()
    await until(lambda: extra.objects.is_active)

    await container.close()

    assert extra.closed
    assert container.list_state.closed
    assert container.detail_state.closed
    assert container.scope.closed
    assert api.closed
    assert not extra.objects.is_active


async def test_closed_holders_are_pruned_on_next_creation():
    container = build_container(_settings(), api=FakeMuseumApi())
    for _ in range(3):
        holder = container.detail_view_state()
        await holder.close()
    kept = container.list_view_state()

    assert container._holders == [
        container.list_state, container.detail_state, kept,
    ]
    await container.close()
