"""Application object graph, built once at startup and passed to whatever needs it."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from bremray.api import (
    ApiClient, CompanyApi, CustomersApi, HealthApi, ItemsApi, JobsApi, PhotosApi, TemplatesApi,
)
from bremray.config import Settings, get_settings
from bremray.db.engine import create_engine, init_db, session_factory
from bremray.db.preferences import PreferenceStore
from bremray.services.service_health import ServiceHealthMonitor
from bremray.stores.company import CompanySettingsStore
from bremray.stores.customers import CustomersStore
from bremray.stores.items import ItemsStore
from bremray.stores.jobs import JobsStore
from bremray.stores.session import SessionStore
from bremray.stores.templates import TemplatesStore


@dataclass
class AppContext:
    settings: Settings
    api: ApiClient
    engine: AsyncEngine
    items: ItemsStore
    customers: CustomersStore
    templates: TemplatesStore
    jobs: JobsStore
    company: CompanySettingsStore
    session: SessionStore
    health: ServiceHealthMonitor

    async def aclose(self) -> None:
        await self.health.stop()
        await self.api.aclose()
        await self.engine.dispose()


async def create_context(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContext:
    settings = settings or get_settings()
    api = ApiClient(settings.api_base_url, transport=transport)

    engine = create_engine(settings.preferences.database_url)
    await init_db(engine)
    preferences = PreferenceStore(session_factory(engine))

    return AppContext(
        settings=settings,
        api=api,
        engine=engine,
        items=ItemsStore(ItemsApi(api)),
        customers=CustomersStore(CustomersApi(api)),
        templates=TemplatesStore(TemplatesApi(api)),
        jobs=JobsStore(
            JobsApi(api),
            PhotosApi(api),
            photo_config=settings.photos,
            tax_rate=settings.pricing.tax_rate,
        ),
        company=CompanySettingsStore(CompanyApi(api)),
        session=SessionStore(preferences, settings.session.admin_emails),
        health=ServiceHealthMonitor(HealthApi(api), interval=settings.health.interval_seconds),
    )


@asynccontextmanager
async def app_context(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    start_health: bool = False,
) -> AsyncIterator[AppContext]:
    ctx = await create_context(settings, transport)
    if start_health:
        ctx.health.start()
    try:
        yield ctx
    finally:
        await ctx.aclose()
