"""Items resource: the billable catalog."""

from __future__ import annotations

from bremray.api.client import ApiClient
from bremray.schemas import Item, ItemCreate, ItemUpdate


class ItemsApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[Item]:
        rows = await self._client.get("/items")
        return [Item.model_validate(r) for r in rows or []]

    async def get(self, item_id: str) -> Item:
        return Item.model_validate(await self._client.get(f"/items/{item_id}"))

    async def create(self, payload: ItemCreate) -> Item:
        return Item.model_validate(await self._client.post("/items", payload.to_wire()))

    async def update(self, item_id: str, changes: ItemUpdate) -> Item:
        return Item.model_validate(await self._client.put(f"/items/{item_id}", changes.to_wire()))

    async def delete(self, item_id: str) -> None:
        await self._client.delete(f"/items/{item_id}")
