"""Job templates store: templates plus their item sub-resource."""

from __future__ import annotations

import logging

from bremray.api.templates import TemplatesApi
from bremray.schemas import JobTemplate
from bremray.stores.base import CollectionStore

logger = logging.getLogger(__name__)


class TemplatesStore(CollectionStore[JobTemplate]):
    noun = "template"
    plural = "templates"

    def __init__(self, api: TemplatesApi):
        super().__init__(api)
        self._api: TemplatesApi = api

    async def load(self, active_only: bool = False) -> None:
        await self._load_with(self._api.list, active_only=active_only)

    def active(self) -> list[JobTemplate]:
        return [t for t in self.data if t.is_active]

    async def add_item(self, template_id: str, item_id: str, default_quantity: int = 1) -> JobTemplate | None:
        """Add an item to a template. An item already on the template is left as is."""
        template = self.find(template_id)
        if template is not None and template.has_item(item_id):
            logger.info("Item %s already on template %s, not adding", item_id, template_id)
            return template
        return await self._mutate_then_reload(
            template_id,
            lambda: self._api.add_item(template_id, item_id, default_quantity),
            "Failed to add item to template",
        )

    async def update_item_quantity(self, template_id: str, item_id: str, default_quantity: int) -> JobTemplate:
        if default_quantity <= 0:
            raise ValueError("default quantity must be positive")
        return await self._mutate_then_reload(
            template_id,
            lambda: self._api.update_item(template_id, item_id, default_quantity),
            "Failed to update template item",
        )

    async def remove_item(self, template_id: str, item_id: str) -> JobTemplate:
        return await self._mutate_then_reload(
            template_id,
            lambda: self._api.remove_item(template_id, item_id),
            "Failed to remove item from template",
        )
