"""Company profile resource (singleton per account)."""

from __future__ import annotations

from bremray.api.client import ApiClient
from bremray.schemas import CompanySettings, CompanySettingsUpdate


class CompanyApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def get(self) -> CompanySettings:
        return CompanySettings.model_validate(await self._client.get("/company"))

    async def update(self, changes: CompanySettingsUpdate) -> CompanySettings:
        return CompanySettings.model_validate(await self._client.put("/company", changes.to_wire()))
