"""Company profile store. Holds a single ``CompanySettings`` rather than a collection."""

from __future__ import annotations

import logging

from bremray.api.company import CompanyApi
from bremray.schemas import CompanySettings, CompanySettingsUpdate
from bremray.stores.base import FAILURES, ObservableStore, StoreState, describe

logger = logging.getLogger(__name__)


class CompanySettingsStore(ObservableStore[CompanySettings | None]):
    def __init__(self, api: CompanyApi):
        super().__init__(None)
        self._api = api

    async def load(self) -> None:
        self._patch(loading=True, error=None)
        try:
            settings = await self._api.get()
        except FAILURES as e:
            logger.error("Failed to load company settings: %s", e)
            self._patch(loading=False, error=describe(e, "Failed to load company settings"))
            return
        self._set(StoreState(settings))

    async def update_settings(self, changes: CompanySettingsUpdate) -> CompanySettings:
        try:
            settings = await self._api.update(changes)
        except FAILURES as e:
            self._patch(error=describe(e, "Failed to update company settings"))
            raise
        self._patch(data=settings, error=None)
        return settings

    async def upload_logo(self, logo_url: str) -> CompanySettings:
        return await self.update_settings(CompanySettingsUpdate(logo=logo_url))

    async def remove_logo(self) -> CompanySettings:
        # explicit None is sent as JSON null: no logo
        return await self.update_settings(CompanySettingsUpdate(logo=None))
