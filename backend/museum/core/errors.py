"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - A lookup miss inside the core is None, never an exception; ObjectNotFoundError
      is raised only at the HTTP boundary
    - to_response() produces REST envelope; to_sse_event() produces SSE envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MuseumError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from museum.core.domain_types import StreamEventType


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    object_id: int | None = None
    url: str | None = None
    status_code: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class MuseumError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "object_id": self.context.object_id,
                    "status_code": self.context.status_code,
                },
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to SSE error event."""
        return {
            "type": StreamEventType.ERROR.value,
            "data": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "severity": self.severity.value,
                "recoverable": self.category in (
                    ErrorCategory.EXTERNAL_API, ErrorCategory.TIMEOUT,
                ),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ObjectNotFoundError(MuseumError):
    """Requested museum object is not in the current snapshot."""
    def __init__(self, object_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.object_id = object_id
        super().__init__(
            f"Museum object '{object_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.object_id = object_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class NetworkError(MuseumError):
    """Catalog request failed in transport, timed out, or returned non-2xx."""
    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        timeout: bool = False,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.url = url
        ctx.status_code = status_code
        ctx.user_message = ctx.user_message or "The museum catalog is unreachable"
        super().__init__(
            f"Catalog request failed: {message}",
            "CATALOG_TIMEOUT" if timeout else "NETWORK_ERROR",
            ErrorCategory.TIMEOUT if timeout else ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.url = url
        self.status_code = status_code


class DeserializationError(MuseumError):
    """Catalog payload is not a JSON array of valid museum objects."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "The museum catalog sent an invalid response"
        super().__init__(
            f"Malformed catalog payload: {message}",
            "DESERIALIZATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 502,
        )


class ScopeClosedError(MuseumError):
    """Work launched in a lifecycle scope that was already closed."""
    def __init__(self, scope_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Scope '{scope_name}' is closed",
            "SCOPE_CLOSED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.scope_name = scope_name
