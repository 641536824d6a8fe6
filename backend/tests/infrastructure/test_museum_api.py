"""Museum Catalog API — HTTP mapping via httpx.MockTransport.

Tests cover:
    - A JSON array becomes MuseumObject records, one request per call
    - Non-2xx, transport failures and timeouts raise NetworkError
    - Invalid JSON, non-array bodies and invalid elements raise DeserializationError
"""

import httpx
import pytest

from museum.core.errors import DeserializationError, NetworkError
from museum.infrastructure.museum_api import HttpMuseumApi

URL = "http://catalog.test/list.json"


def _api(handler) -> HttpMuseumApi:
    return HttpMuseumApi(URL, transport=httpx.MockTransport(handler))


async def test_fetch_objects_parses_array():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[
            {"objectID": 1, "title": "Bowl", "primaryImage": "https://img/1.jpg"},
            {"objectID": 2, "title": "Mask"},
        ])

    api = _api(handler)
    objects = await api.fetch_objects()
    await api.aclose()

    assert [o.object_id for o in objects] == [1, 2]
    assert objects[0].primary_image == "https://img/1.jpg"
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == URL


async def test_each_call_issues_one_request():
    count = []

    def handler(request):
        count.append(1)
        return httpx.Response(200, json=[])

    api = _api(handler)
    await api.fetch_objects()
    await api.fetch_objects()
    assert len(count) == 2


async def test_empty_array_is_empty_list():
    api = _api(lambda request: httpx.Response(200, json=[]))
    assert await api.fetch_objects() == []


async def test_server_error_raises_network_error():
    api = _api(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(NetworkError) as exc_info:
        await api.fetch_objects()
    assert exc_info.value.status_code == 500
    assert exc_info.value.url == URL
    assert exc_info.value.code == "NETWORK_ERROR"


async def test_not_found_raises_network_error():
    api = _api(lambda request: httpx.Response(404))
    with pytest.raises(NetworkError) as exc_info:
        await api.fetch_objects()
    assert exc_info.value.status_code == 404


async def test_connection_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await _api(handler).fetch_objects()
    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


async def test_timeout_raises_timeout_network_error():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await _api(handler).fetch_objects()
    assert exc_info.value.code == "CATALOG_TIMEOUT"


async def test_invalid_json_raises_deserialization_error():
    api = _api(lambda request: httpx.Response(200, text="<html>not json</html>"))
    with pytest.raises(DeserializationError):
        await api.fetch_objects()


async def test_non_array_body_raises_deserialization_error():
    api = _api(lambda request: httpx.Response(200, json={"objects": []}))
    with pytest.raises(DeserializationError) as exc_info:
        await api.fetch_objects()
    assert "dict" in exc_info.value.message


async def test_invalid_element_fails_whole_payload():
    api = _api(lambda request: httpx.Response(200, json=[
        {"objectID": 1, "title": "Bowl"},
        {"title": "Missing id"},
    ]))
    with pytest.raises(DeserializationError) as exc_info:
        await api.fetch_objects()
    assert exc_info.value.context.debug_info["errors"]


async def test_aclose_closes_owned_client():
    api = _api(lambda request: httpx.Response(200, json=[]))
    await api.aclose()
    assert api.client.is_closed
