"""Stores wired through AppContext against the in-memory backend."""

from __future__ import annotations

import io
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport
from PIL import Image

from bremray.api import ApiError
from bremray.config import ApiConfig, PreferencesConfig, SessionConfig, Settings
from bremray.context import app_context
from bremray.permissions import Role
from bremray.schemas import (
    CompanySettingsUpdate, CustomerUpdate, JobStatus, TemplateCreate, TemplateItem, TemplatePhase, TemplateUpdate,
)

from tests.integration.fake_backend import FakeBackend


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def ctx(backend, tmp_path):
    settings = Settings(
        api=ApiConfig(base_url="http://test/api"),
        preferences=PreferencesConfig(database_url=f"sqlite+aiosqlite:///{tmp_path}/preferences.db"),
        session=SessionConfig(admin_emails=["boss@bremray.example"]),
    )
    async with app_context(settings, transport=ASGITransport(app=backend.app)) as c:
        yield c


@pytest_asyncio.fixture
async def sunroom(backend, ctx):
    """Catalog of two items and a "Sunroom Install" template: A x3, B x1, one phase."""
    a = backend.seed_item("Recessed Light", 45.0)
    b = backend.seed_item("Dimmer Switch", 32.5)
    customer = backend.seed_customer("Dana Whitfield", email="dana@example.com")
    template = await ctx.templates.create(TemplateCreate(
        name="Sunroom Install",
        items=[TemplateItem(item_id=a["id"], default_quantity=3), TemplateItem(item_id=b["id"], default_quantity=1)],
        phases=[TemplatePhase(name="Framing", order=1)],
    ))
    return {"a": a, "b": b, "customer": customer, "template": template}


async def test_load_catalog(backend, ctx):
    backend.seed_item("Outlet", 12.5, category="Devices")
    backend.seed_item("Wire", 1.1, unit="ft", category="Wire")
    await ctx.items.load()
    assert sorted(i.name for i in ctx.items.data) == ["Outlet", "Wire"]
    assert ctx.items.categories() == ["Devices", "Wire"]
    assert ctx.items.state.error is None


async def test_create_job_from_template_snapshots_items_and_phases(ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(
        customer_id=sunroom["customer"]["id"],
        address="12 Lake Rd",
        template_id=sunroom["template"].id,
    )
    job = ctx.jobs.find(job_id)
    assert job.status is JobStatus.SCHEDULED
    lines = {i.item_id: i for i in job.items}
    assert lines[sunroom["a"]["id"]].quantity == 3
    assert lines[sunroom["b"]["id"]].quantity == 1
    assert all(i.installed_quantity == 0 for i in job.items)
    assert [(p.name, p.order, p.is_completed) for p in job.phases] == [("Framing", 1, False)]


async def test_create_job_with_unknown_template_fails(ctx, sunroom):
    with pytest.raises(ApiError) as exc:
        await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", "nope")
    assert exc.value.status == 400
    assert ctx.jobs.state.error == "Template not found"
    assert ctx.jobs.data == ()


async def test_installed_quantities_drive_server_total(backend, ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)
    job = await ctx.jobs.record_installed(job_id, sunroom["a"]["id"], 2)
    assert job.find_item(sunroom["a"]["id"]).installed_quantity == 2
    assert job.total_amount == Decimal("90.0")
    assert ctx.jobs.calculate_job_total(job) == Decimal("90.0")
    assert backend.payloads[-1] == ("PUT", f"/jobs/{job_id}/items/{sunroom['a']['id']}", {"installedQuantity": 2})


async def test_job_item_add_update_remove(ctx, sunroom):
    extra = sunroom["b"]["id"]
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)

    job = await ctx.jobs.remove_item(job_id, extra)
    assert job.find_item(extra) is None
    job = await ctx.jobs.add_item(job_id, extra, 4)
    assert job.find_item(extra).quantity == 4
    job = await ctx.jobs.update_item_quantity(job_id, extra, 6)
    assert ctx.jobs.find(job_id).find_item(extra).quantity == 6


async def test_phase_completion_round_trip(ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)
    phase_id = ctx.jobs.find(job_id).phases[0].id

    job = await ctx.jobs.set_phase_completed(job_id, phase_id)
    assert job.phases[0].is_completed and job.phases[0].completed_at is not None

    job = await ctx.jobs.set_phase_completed(job_id, phase_id, False)
    assert not job.phases[0].is_completed and job.phases[0].completed_at is None


async def test_status_and_dates(backend, ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)
    job = await ctx.jobs.update_status(job_id, "in_progress")
    assert job.status is JobStatus.IN_PROGRESS
    assert backend.payloads[-1][2] == {"status": "in_progress"}

    with pytest.raises(ValueError):
        await ctx.jobs.update_status(job_id, "on_hold")


async def test_filtered_job_loads(ctx, sunroom):
    first = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "1 Lake Rd", sunroom["template"].id)
    await ctx.jobs.create_from_template(sunroom["customer"]["id"], "2 Lake Rd", sunroom["template"].id)
    await ctx.jobs.update_status(first, JobStatus.COMPLETED)

    await ctx.jobs.load_by_status(JobStatus.COMPLETED)
    assert [j.id for j in ctx.jobs.data] == [first]

    await ctx.jobs.load_by_customer(sunroom["customer"]["id"])
    assert len(ctx.jobs.data) == 2


async def test_permit_toggle_confirmed_by_backend(backend, ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)
    task = ctx.jobs.toggle_permit(job_id)
    assert ctx.jobs.find(job_id).permit_required is True
    assert await task is True
    assert backend.jobs[job_id]["permitRequired"] is True


async def test_photos_upload_and_remove(backend, ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), color=(10, 20, 30)).save(buf, format="JPEG")

    job = await ctx.jobs.upload_photos(job_id, [("panel.jpg", buf.getvalue(), "image/jpeg")])
    assert len(job.photos) == 1
    assert job.photos[0].url.endswith("/panel.jpg")

    job = await ctx.jobs.remove_photo(job_id, job.photos[0].id)
    assert job.photos == []
    assert len(backend.deleted_photos) == 1


async def test_send_to_invoicing_links_invoice(ctx, sunroom):
    job_id = await ctx.jobs.create_from_template(sunroom["customer"]["id"], "12 Lake Rd", sunroom["template"].id)
    result = await ctx.jobs.send_to_invoicing(job_id)
    assert result["invoiceNumber"] == "1001"
    assert ctx.jobs.find(job_id).invoice.id == "INV-1001"


async def test_remove_missing_job_reports_error(ctx):
    with pytest.raises(ApiError) as exc:
        await ctx.jobs.remove("ghost")
    assert exc.value.status == 404
    assert ctx.jobs.state.error == "job not found"


async def test_template_items_skip_existing(backend, ctx, sunroom):
    template_id = sunroom["template"].id
    before = len(backend.payloads)
    same = await ctx.templates.add_item(template_id, sunroom["a"]["id"])
    assert same.has_item(sunroom["a"]["id"])
    assert len(backend.payloads) == before

    wire = backend.seed_item("14/2 Romex", 0.89, unit="ft")
    template = await ctx.templates.add_item(template_id, wire["id"], 50)
    assert template.has_item(wire["id"])

    template = await ctx.templates.update_item_quantity(template_id, wire["id"], 75)
    assert next(ti for ti in template.items if ti.item_id == wire["id"]).default_quantity == 75

    template = await ctx.templates.remove_item(template_id, wire["id"])
    assert not template.has_item(wire["id"])


async def test_active_templates_filter(ctx, sunroom):
    await ctx.templates.update(sunroom["template"].id, TemplateUpdate(is_active=False))
    await ctx.templates.load(active_only=True)
    assert ctx.templates.data == ()
    await ctx.templates.load()
    assert len(ctx.templates.data) == 1


async def test_customers_crud(backend, ctx):
    customer = await ctx.customers.create("Lee Ortiz", email="lee@example.com")
    assert ctx.customers.find(customer.id).email == "lee@example.com"

    updated = await ctx.customers.update(customer.id, CustomerUpdate(phone="555-0100"))
    assert updated.phone == "555-0100"
    assert backend.payloads[-1] == ("PUT", f"/customers/{customer.id}", {"phone": "555-0100"})

    await ctx.customers.remove(customer.id)
    assert ctx.customers.data == ()


async def test_company_logo_removal_sends_null(backend, ctx):
    await ctx.company.load()
    assert ctx.company.data.logo == "https://cdn.example/logo.png"

    settings = await ctx.company.remove_logo()
    assert settings.logo is None
    assert backend.payloads[-1] == ("PUT", "/company", {"logo": None})

    settings = await ctx.company.update_settings(CompanySettingsUpdate(phone="555-0199"))
    assert settings.phone == "555-0199"
    assert settings.logo is None


async def test_health_checks(backend, ctx):
    backend.health["cloudflare"] = False
    status = await ctx.health.check_all()
    assert status.as_dict() == {"wave": "connected", "cloudflare": "disconnected"}


async def test_admin_view_mode_persists_until_logout(ctx):
    await ctx.session.sign_in("boss@bremray.example")
    await ctx.session.toggle_view_mode()
    assert ctx.session.effective_role is Role.TECHNICIAN

    identity = await ctx.session.sign_in("boss@bremray.example")
    assert identity.viewing_as_technician is True

    await ctx.session.logout()
    identity = await ctx.session.sign_in("boss@bremray.example")
    assert identity.viewing_as_technician is False
    assert ctx.session.effective_role is Role.ADMIN
