"""Pydantic models for backend resources and partial-update payloads."""

from bremray.schemas.base import Entity, Money, WireModel
from bremray.schemas.item import Item, ItemCreate, ItemUpdate, Unit
from bremray.schemas.customer import Customer, CustomerCreate, CustomerUpdate
from bremray.schemas.template import (
    JobTemplate, TemplateCreate, TemplateItem, TemplatePhase, TemplateUpdate,
)
from bremray.schemas.job import (
    InvoiceRef, Job, JobCreate, JobItem, JobPhase, JobPhoto, JobStatus, JobUpdate,
)
from bremray.schemas.company import CompanySettings, CompanySettingsUpdate

__all__ = [
    "Entity", "Money", "WireModel",
    "Item", "ItemCreate", "ItemUpdate", "Unit",
    "Customer", "CustomerCreate", "CustomerUpdate",
    "JobTemplate", "TemplateCreate", "TemplateItem", "TemplatePhase", "TemplateUpdate",
    "InvoiceRef", "Job", "JobCreate", "JobItem", "JobPhase", "JobPhoto", "JobStatus", "JobUpdate",
    "CompanySettings", "CompanySettingsUpdate",
]
