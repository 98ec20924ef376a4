from __future__ import annotations
from bremray.schemas.base import WireModel


class CompanySettings(WireModel):
    """Business profile, one per account. ``logo`` is None when there is no logo."""

    model_config = {"frozen": True}

    id: str | None = None
    name: str = ""
    logo: str | None = None
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: str = ""
    email: str = ""
    license: str = ""
    website: str = ""


class CompanySettingsUpdate(WireModel):
    name: str | None = None
    logo: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    phone: str | None = None
    email: str | None = None
    license: str | None = None
    website: str | None = None
