"""Billable items catalog store."""

from __future__ import annotations

from bremray.api.items import ItemsApi
from bremray.schemas import Item
from bremray.stores.base import CollectionStore


class ItemsStore(CollectionStore[Item]):
    noun = "item"
    plural = "items"

    def __init__(self, api: ItemsApi):
        super().__init__(api)

    def categories(self) -> list[str]:
        return sorted({i.category for i in self.data if i.category})
