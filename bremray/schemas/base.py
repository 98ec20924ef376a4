"""Shared pydantic base: snake_case in memory, camelCase on the wire."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel

# Money travels as a JSON number; in memory it is always a Decimal.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WireModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        """Dump only the fields the caller actually set, under their wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Entity(WireModel):
    """Server-owned record. Immutable in memory; stores swap whole instances."""

    model_config = {"frozen": True}

    id: str
