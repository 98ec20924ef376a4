from __future__ import annotations
from datetime import datetime
from pydantic import Field, field_validator, model_validator
from bremray.schemas.base import Entity, WireModel


class TemplateItem(WireModel):
    model_config = {"frozen": True}

    id: str | None = None
    item_id: str
    default_quantity: int = Field(default=1, gt=0)


class TemplatePhase(WireModel):
    model_config = {"frozen": True}

    id: str | None = None
    name: str
    order: int
    description: str | None = None


def _check_phase_order(phases: list[TemplatePhase]) -> None:
    orders = [p.order for p in phases]
    if len(orders) != len(set(orders)):
        raise ValueError(f"phase order values must be unique, got {sorted(orders)}")


class JobTemplate(Entity):
    name: str
    description: str = ""
    items: list[TemplateItem] = []
    phases: list[TemplatePhase] = []
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("items", "phases", "description", mode="before")
    @classmethod
    def _null_to_empty(cls, v, info):
        if v is None:
            return "" if info.field_name == "description" else []
        return v

    @model_validator(mode="after")
    def _unique_phase_order(self):
        _check_phase_order(self.phases)
        return self

    def has_item(self, item_id: str) -> bool:
        return any(ti.item_id == item_id for ti in self.items)

    def ordered_phases(self) -> list[TemplatePhase]:
        return sorted(self.phases, key=lambda p: p.order)


class TemplateCreate(WireModel):
    name: str
    description: str = ""
    items: list[TemplateItem] = []
    phases: list[TemplatePhase] = []

    @model_validator(mode="after")
    def _unique_phase_order(self):
        _check_phase_order(self.phases)
        return self

    def to_wire(self) -> dict:
        # new templates always send every collection, even when empty
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TemplateUpdate(WireModel):
    name: str | None = None
    description: str | None = None
    is_active: bool | None = None
