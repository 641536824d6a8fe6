"""Boundary Protocols — contracts between the repository and its collaborators.

Invariants:
    - Services depend on these Protocols, never on concrete shell classes
    - Implementations provided by the composition root via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - read()/lookup() return async iterators: each call is an independent,
      restartable subscription
"""

from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from museum.core.domain_types import ObjectId
from museum.schemas.museum_object import MuseumObject


class MuseumApi(Protocol):
    """Contract for the remote catalog — implemented by infrastructure."""
    async def fetch_objects(self) -> list[MuseumObject]: ...


class MuseumStorage(Protocol):
    """Contract for the in-memory snapshot cache — implemented by infrastructure."""
    def read(self) -> AsyncIterator[tuple[MuseumObject, ...]]: ...
    def write(self, objects: Sequence[MuseumObject]) -> None: ...
    def lookup(self, object_id: ObjectId) -> AsyncIterator[MuseumObject | None]: ...
