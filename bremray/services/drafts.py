"""Client-only job drafts built from a template snapshot.

A draft copies the template's items and phases at construction time, so later
template edits do not reach it. Drafts carry no server total; their totals are
computed locally (see ``services.pricing``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from ulid import ULID

from bremray.errors import ItemNotFoundError, TemplateNotFoundError
from bremray.schemas import Item, Job, JobCreate, JobItem, JobPhase, JobTemplate


def _ulid() -> str:
    return str(ULID())


class JobDraft(Job):
    def to_create(self) -> JobCreate:
        return JobCreate(
            customer_id=self.customer_id,
            template_id=self.template_id,
            address=self.address,
            scheduled_date=self.scheduled_date,
            notes=self.notes,
        )


def build_job_draft(
    template_id: str,
    templates: Iterable[JobTemplate],
    catalog: Iterable[Item],
    customer_id: str,
    address: str,
    scheduled_date: datetime | None = None,
    notes: str | None = None,
) -> JobDraft:
    template = next((t for t in templates if t.id == template_id), None)
    if template is None:
        raise TemplateNotFoundError(template_id)
    items_by_id = {i.id: i for i in catalog}

    items = []
    for ti in template.items:
        item = items_by_id.get(ti.item_id)
        if item is None:
            raise ItemNotFoundError(ti.item_id)
        items.append(JobItem(
            id=_ulid(),
            item_id=item.id,
            name=item.name,
            nickname=item.nickname,
            quantity=ti.default_quantity,
            installed_quantity=0,
            price=item.unit_price,
        ))

    phases = [
        JobPhase(id=_ulid(), name=p.name, order=p.order, is_completed=False)
        for p in template.ordered_phases()
    ]

    now = datetime.now(timezone.utc)
    return JobDraft(
        id=_ulid(),
        customer_id=customer_id,
        template_id=template.id,
        address=address,
        scheduled_date=scheduled_date,
        notes=notes,
        items=items,
        phases=phases,
        created_at=now,
        updated_at=now,
    )
