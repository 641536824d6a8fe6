"""API test fixtures — container with a fake catalog + FastAPI test client.

Invariants:
    - get_container dependency overridden; the lifespan (and real network) never runs
    - Every test gets a fresh container, closed after the test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from museum.api.dependencies import get_container
from museum.config import Settings
from museum.container import build_container
from museum.main import app

from tests.fake_museum_api import FakeMuseumApi


@pytest.fixture
def fake_api():
    return FakeMuseumApi()


@pytest.fixture
async def container(fake_api):
    settings = Settings(
        museum_api_url="http://catalog.test/list.json",
        http_timeout_seconds=1.0,
        list_stop_timeout_ms=0,
        prefetch_on_startup=False,
    )
    c = build_container(settings, api=fake_api)
    yield c
    await c.close()


@pytest.fixture
async def client(container):
    app.dependency_overrides[get_container] = lambda: container
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
