"""Customers store."""

from __future__ import annotations

from bremray.api.customers import CustomersApi
from bremray.schemas import Customer, CustomerCreate
from bremray.stores.base import CollectionStore


class CustomersStore(CollectionStore[Customer]):
    noun = "customer"
    plural = "customers"

    def __init__(self, api: CustomersApi):
        super().__init__(api)

    async def create(self, payload: CustomerCreate | str, email: str | None = None, phone: str | None = None) -> Customer:
        """Accepts a ``CustomerCreate`` or the ``name, email, phone`` shorthand."""
        if isinstance(payload, str):
            payload = CustomerCreate(name=payload, email=email, phone=phone)
        return await super().create(payload)
