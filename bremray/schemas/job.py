from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import field_validator, model_validator
from bremray.schemas.base import Entity, Money, WireModel


class JobStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class JobPhase(Entity):
    name: str
    order: int
    is_completed: bool = False
    completed_at: datetime | None = None

    @model_validator(mode="after")
    def _completed_at_matches_flag(self):
        if self.is_completed != (self.completed_at is not None):
            raise ValueError(
                f"phase {self.id}: completedAt must be set exactly when isCompleted is true"
            )
        return self


class JobItem(Entity):
    item_id: str
    name: str = ""
    nickname: str | None = None
    quantity: float = 0
    installed_quantity: float = 0
    price: Money = Decimal("0")
    total: Money | None = None


class JobPhoto(Entity):
    job_id: str | None = None
    url: str
    caption: str | None = None
    uploaded_at: datetime | None = None


class InvoiceRef(WireModel):
    model_config = {"frozen": True}

    id: str
    url: str | None = None


class Job(Entity):
    customer_id: str
    template_id: str
    address: str = ""
    status: JobStatus = JobStatus.SCHEDULED
    current_phase_id: str | None = None
    scheduled_date: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    permit_required: bool = False
    permit_number: str | None = None
    total_amount: Money | None = None
    items: list[JobItem] = []
    phases: list[JobPhase] = []
    photos: list[JobPhoto] = []
    notes: str | None = None
    invoice: InvoiceRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("items", "phases", "photos", mode="before")
    @classmethod
    def _null_to_empty(cls, v):
        return [] if v is None else v

    def find_item(self, item_id: str) -> JobItem | None:
        return next((i for i in self.items if i.item_id == item_id), None)


class JobCreate(WireModel):
    customer_id: str
    template_id: str
    address: str
    scheduled_date: datetime | None = None
    notes: str | None = None


class JobUpdate(WireModel):
    address: str | None = None
    status: JobStatus | None = None
    scheduled_date: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    permit_required: bool | None = None
    permit_number: str | None = None
    notes: str | None = None
