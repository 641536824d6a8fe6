"""View Schemas — response shapes rendered from view-state holders.

Invariants:
    - ListStateView.error is None while the list flow is healthy
    - Objects are rendered with the catalog's camelCase keys
"""

from pydantic import BaseModel

from museum.schemas.museum_object import MuseumObject


class ErrorView(BaseModel):
    """User-facing error summary — never carries internal details."""
    code: str
    message: str
    recoverable: bool


class ListStateView(BaseModel):
    """Current state of the list holder."""
    objects: list[MuseumObject] = []
    error: ErrorView | None = None


class RefreshAccepted(BaseModel):
    status: str = "refreshing"
