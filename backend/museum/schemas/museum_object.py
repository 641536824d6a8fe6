"""Museum Object Schema — immutable record deserialized from the catalog payload.

Invariants:
    - Frozen: an object is replaced wholesale on refresh, never mutated
    - objectID and title are required; descriptive fields default to ""
    - Serializes back to the catalog's camelCase keys (by_alias=True)

Design Decisions:
    - Field aliases keep Python names snake_case while matching the upstream wire format
    - extra="ignore": upstream may add fields without breaking deserialization
"""

from pydantic import BaseModel, ConfigDict, Field


class MuseumObject(BaseModel):
    """One catalog entry as published by the museum API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    object_id: int = Field(alias="objectID")
    title: str
    artist_display_name: str = Field("", alias="artistDisplayName")
    medium: str = ""
    dimensions: str = ""
    object_url: str = Field("", alias="objectURL")
    object_date: str = Field("", alias="objectDate")
    primary_image: str = Field("", alias="primaryImage")
    primary_image_small: str = Field("", alias="primaryImageSmall")
    repository: str = ""
    credit_line: str = Field("", alias="creditLine")
