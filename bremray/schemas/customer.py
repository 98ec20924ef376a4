from __future__ import annotations
from bremray.schemas.base import Entity, WireModel


class Customer(Entity):
    name: str
    phone: str | None = None
    email: str | None = None


class CustomerCreate(WireModel):
    name: str
    email: str | None = None
    phone: str | None = None


class CustomerUpdate(WireModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
