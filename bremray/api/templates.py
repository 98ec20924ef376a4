"""Job templates resource and its item sub-resource."""

from __future__ import annotations

from bremray.api.client import ApiClient
from bremray.schemas import JobTemplate, TemplateCreate, TemplateUpdate


class TemplatesApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self, active_only: bool = False) -> list[JobTemplate]:
        params = {"active": "true"} if active_only else None
        rows = await self._client.get("/templates", params=params)
        return [JobTemplate.model_validate(r) for r in rows or []]

    async def get(self, template_id: str) -> JobTemplate:
        return JobTemplate.model_validate(await self._client.get(f"/templates/{template_id}"))

    async def create(self, payload: TemplateCreate) -> JobTemplate:
        return JobTemplate.model_validate(await self._client.post("/templates", payload.to_wire()))

    async def update(self, template_id: str, changes: TemplateUpdate) -> JobTemplate:
        raw = await self._client.put(f"/templates/{template_id}", changes.to_wire())
        return JobTemplate.model_validate(raw)

    async def delete(self, template_id: str) -> None:
        await self._client.delete(f"/templates/{template_id}")

    async def add_item(self, template_id: str, item_id: str, default_quantity: int = 1) -> None:
        await self._client.post(
            f"/templates/{template_id}/items",
            {"itemId": item_id, "defaultQuantity": default_quantity},
        )

    async def update_item(self, template_id: str, item_id: str, default_quantity: int) -> None:
        await self._client.put(
            f"/templates/{template_id}/items/{item_id}",
            {"defaultQuantity": default_quantity},
        )

    async def remove_item(self, template_id: str, item_id: str) -> None:
        await self._client.delete(f"/templates/{template_id}/items/{item_id}")
