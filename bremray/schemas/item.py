from __future__ import annotations
from datetime import datetime
from enum import Enum
from pydantic import Field
from bremray.schemas.base import Entity, Money, WireModel


class Unit(str, Enum):
    EACH = "each"
    LENGTH = "ft"
    HOUR = "hr"
    LOT = "lot"


class Item(Entity):
    name: str
    nickname: str | None = None
    description: str | None = None
    unit: Unit
    unit_price: Money = Field(ge=0)
    category: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ItemCreate(WireModel):
    name: str
    nickname: str | None = None
    description: str | None = None
    unit: Unit
    unit_price: Money = Field(ge=0)
    category: str | None = None


class ItemUpdate(WireModel):
    name: str | None = None
    nickname: str | None = None
    description: str | None = None
    unit: Unit | None = None
    unit_price: Money | None = Field(default=None, ge=0)
    category: str | None = None
