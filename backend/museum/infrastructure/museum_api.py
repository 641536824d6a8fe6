"""Museum Catalog API — one GET against the catalog endpoint, mapped to domain records.

Invariants:
    - Exactly one outbound request per fetch_objects() call (no retry, no caching)
    - Transport failures, timeouts and non-2xx responses raise NetworkError
    - Invalid JSON, non-array bodies and invalid elements raise DeserializationError
    - asyncio.CancelledError is never caught: cancellation propagates to the caller

Design Decisions:
    - Wrapper over raw httpx client: isolates error mapping from the repository
    - TypeAdapter validates the whole array at once: one malformed element fails
      the whole payload rather than silently dropping it
"""

import json
import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from museum.core.errors import DeserializationError, ErrorContext, NetworkError
from museum.schemas.museum_object import MuseumObject

logger = logging.getLogger(__name__)

_OBJECTS_ADAPTER = TypeAdapter(list[MuseumObject])


class HttpMuseumApi:
    """Fetches the full catalog listing over HTTP."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.client = client or httpx.AsyncClient(
            timeout=timeout_seconds, transport=transport,
        )

    async def fetch_objects(self) -> list[MuseumObject]:
        """GET the catalog and deserialize it into MuseumObject records."""
        response = await self._get()
        objects = self._parse(response)
        logger.info(
            "Fetched %d museum objects", len(objects),
            extra={"url": self.url, "count": len(objects)},
        )
        return objects

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get(self) -> httpx.Response:
        try:
            response = await self.client.get(self.url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Catalog request timed out: %s", e, extra={"url": self.url})
            raise NetworkError("timeout", url=self.url, timeout=True) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "Catalog returned HTTP %d", status_code,
                extra={"url": self.url, "status_code": status_code},
            )
            raise NetworkError(
                f"HTTP {status_code}", url=self.url, status_code=status_code,
            ) from e
        except httpx.TransportError as e:
            logger.warning("Catalog transport error: %s", e, extra={"url": self.url})
            raise NetworkError(str(e) or type(e).__name__, url=self.url) from e
        return response

    def _parse(self, response: httpx.Response) -> list[MuseumObject]:
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DeserializationError(
                "body is not valid JSON",
                ErrorContext(url=self.url, debug_info={"error": str(e)}),
            ) from e
        if not isinstance(payload, list):
            raise DeserializationError(
                f"expected a JSON array, got {type(payload).__name__}",
                ErrorContext(url=self.url),
            )
        try:
            return _OBJECTS_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise DeserializationError(
                f"{e.error_count()} invalid field(s)",
                ErrorContext(url=self.url, debug_info={"errors": e.errors()}),
            ) from e
