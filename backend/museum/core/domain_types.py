"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ObjectId wraps the catalog's integer identifier — never a bare int in services
    - EMPTY_SNAPSHOT is the cache's value before the first successful fetch

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ObjectId = NewType("ObjectId", int)


# ─── Value Types ─────────────────────────────────────────────────

EMPTY_SNAPSHOT: tuple = ()


# ─── Enums ───────────────────────────────────────────────────────

class StreamEventType(str, Enum):
    """SSE event types emitted by the rendering layer."""
    OBJECTS = "objects"
    OBJECT = "object"
    ERROR = "error"
