"""Pydantic model for the ``City`` sample entity.

Firestore stores documents as maps, so the model round-trips through
``to_dict()`` / ``from_dict()``.  Unset fields are omitted on write,
leaving them absent from the stored document rather than ``null``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class City(BaseModel):
    """A city document in the ``cities`` collection.

    Attributes:
        name: Display name.
        state: State or province code.
        country: Country name.
        capital: Whether the city is a national capital.
        population: Head count, never negative.
        regions: Region tags, used by the array union/removal samples.
    """

    name: str | None = None
    state: str | None = None
    country: str | None = None
    capital: bool | None = None
    population: int | None = Field(default=None, ge=0)
    regions: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> City:
        """Build a ``City`` from a Firestore document map."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a Firestore document map, dropping unset fields."""
        return self.model_dump(exclude_none=True)
