"""Customers resource."""

from __future__ import annotations

from bremray.api.client import ApiClient
from bremray.schemas import Customer, CustomerCreate, CustomerUpdate


class CustomersApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[Customer]:
        rows = await self._client.get("/customers")
        return [Customer.model_validate(r) for r in rows or []]

    async def get(self, customer_id: str) -> Customer:
        return Customer.model_validate(await self._client.get(f"/customers/{customer_id}"))

    async def create(self, payload: CustomerCreate) -> Customer:
        return Customer.model_validate(await self._client.post("/customers", payload.to_wire()))

    async def update(self, customer_id: str, changes: CustomerUpdate) -> Customer:
        raw = await self._client.put(f"/customers/{customer_id}", changes.to_wire())
        return Customer.model_validate(raw)

    async def delete(self, customer_id: str) -> None:
        await self._client.delete(f"/customers/{customer_id}")
