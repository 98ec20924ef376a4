"""Jobs store.

Nested collections (items, phases, photos) are never rebuilt client-side:
every sub-resource mutation is followed by a reload of the one parent job.
The permit toggle is the single optimistic path.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from bremray.api.jobs import JobsApi
from bremray.api.photos import PhotosApi
from bremray.config import PhotoConfig
from bremray.schemas import Job, JobCreate, JobStatus, JobUpdate
from bremray.services.photo_files import PhotoPart, validate_photo
from bremray.services.pricing import DEFAULT_TAX_RATE, calculate_job_total
from bremray.stores.base import FAILURES, CollectionStore, describe

logger = logging.getLogger(__name__)

_UNSET = object()


class JobsStore(CollectionStore[Job]):
    noun = "job"
    plural = "jobs"

    def __init__(
        self,
        api: JobsApi,
        photos: PhotosApi,
        photo_config: PhotoConfig | None = None,
        tax_rate: Decimal = DEFAULT_TAX_RATE,
    ):
        super().__init__(api)
        self._api: JobsApi = api
        self._photos = photos
        self._photo_config = photo_config or PhotoConfig()
        self._tax_rate = tax_rate

    # ── reads ─────────────────────────────────────────────

    async def load_by_status(self, status: JobStatus | str) -> None:
        await self._load_with(self._api.list, status=status)

    async def load_by_customer(self, customer_id: str) -> None:
        await self._load_with(self._api.list, customer_id=customer_id)

    async def refresh(self, job_id: str) -> Job | None:
        """Refetch one job and replace (or append) it."""
        try:
            return await self._reload(job_id)
        except FAILURES as e:
            logger.error("Failed to load job %s: %s", job_id, e)
            self._patch(error=describe(e, "Failed to load job"))
            return None

    # ── job writes ────────────────────────────────────────

    async def create_from_template(
        self,
        customer_id: str,
        address: str,
        template_id: str,
        scheduled_date: datetime | None = None,
        notes: str | None = None,
    ) -> str:
        """Create a job; the backend snapshots the template's items and phases into it."""
        payload = JobCreate(
            customer_id=customer_id,
            template_id=template_id,
            address=address,
            scheduled_date=scheduled_date,
            notes=notes,
        )
        job = await self.create(payload)
        return job.id

    async def update_status(self, job_id: str, status: JobStatus | str) -> Job:
        return await self.update(job_id, JobUpdate(status=JobStatus(status)))

    async def update_dates(
        self,
        job_id: str,
        scheduled_date: datetime | None | object = _UNSET,
        start_date: datetime | None | object = _UNSET,
        end_date: datetime | None | object = _UNSET,
    ) -> Job:
        """Send only the dates passed. Passing ``None`` clears that date."""
        dates = {
            "scheduled_date": scheduled_date,
            "start_date": start_date,
            "end_date": end_date,
        }
        return await self.update(job_id, JobUpdate(**{k: v for k, v in dates.items() if v is not _UNSET}))

    def toggle_permit(self, job_id: str) -> asyncio.Task | None:
        """Flip ``permit_required`` locally now and confirm with the backend in the background.

        Returns the background task (``None`` when the job is not loaded). If the
        backend rejects the change the pre-toggle collection is restored and
        ``error`` is set.
        """
        job = self.find(job_id)
        if job is None:
            logger.warning("toggle_permit: job %s is not loaded", job_id)
            return None
        flipped = not job.permit_required

        def patch(jobs: tuple[Job, ...]) -> tuple[Job, ...]:
            return tuple(
                j.model_copy(update={"permit_required": flipped}) if j.id == job_id else j
                for j in jobs
            )

        return self._optimistic(
            patch,
            lambda: self._api.update(job_id, JobUpdate(permit_required=flipped)),
            "Failed to update permit status",
        )

    async def send_to_invoicing(self, job_id: str) -> dict[str, Any]:
        """Create the Wave invoice for a job, then reload it to pick up the invoice link."""
        result: dict[str, Any] = {}

        async def send() -> None:
            result.update(await self._api.send_to_invoicing(job_id) or {})

        await self._mutate_then_reload(job_id, send, "Failed to send job to Wave")
        return result

    async def remove(self, job_id: str) -> None:
        """Delete a job, removing its photos from object storage first.

        Each photo leaves the local job as soon as the backend has deleted it, so
        a failure part way through never leaves deleted photos listed locally.
        """
        job = self.find(job_id)
        for photo in list(job.photos) if job else []:
            try:
                await self._photos.delete(job_id, photo.id)
            except FAILURES as e:
                self._patch(error=describe(e, "Failed to delete job photos"))
                raise
            self._detach_photo(job_id, photo.id)
        await super().remove(job_id)

    # ── items ─────────────────────────────────────────────

    async def add_item(self, job_id: str, item_id: str, quantity: float) -> Job:
        return await self._mutate_then_reload(
            job_id, lambda: self._api.add_item(job_id, item_id, quantity), "Failed to add item"
        )

    async def update_item_quantity(self, job_id: str, item_id: str, quantity: float) -> Job:
        return await self._mutate_then_reload(
            job_id,
            lambda: self._api.update_item(job_id, item_id, quantity=quantity),
            "Failed to update item quantity",
        )

    async def record_installed(self, job_id: str, item_id: str, installed_quantity: float) -> Job:
        """Technicians record how many units are actually installed."""
        if installed_quantity < 0:
            raise ValueError("installed quantity cannot be negative")
        return await self._mutate_then_reload(
            job_id,
            lambda: self._api.update_item(job_id, item_id, installed_quantity=installed_quantity),
            "Failed to update installed quantity",
        )

    async def remove_item(self, job_id: str, item_id: str) -> Job:
        return await self._mutate_then_reload(
            job_id, lambda: self._api.remove_item(job_id, item_id), "Failed to remove item"
        )

    # ── phases ────────────────────────────────────────────

    async def set_phase_completed(self, job_id: str, phase_id: str, is_completed: bool = True) -> Job:
        return await self._mutate_then_reload(
            job_id,
            lambda: self._api.update_phase(job_id, phase_id, is_completed),
            "Failed to update phase",
        )

    # ── photos ────────────────────────────────────────────

    async def upload_photos(self, job_id: str, files: list[PhotoPart]) -> Job:
        """Validate then upload ``(filename, data, content_type)`` parts.

        Validation failures raise ``PhotoValidationError`` before anything is sent.
        """
        parts = [validate_photo(name, data, self._photo_config) for name, data, _ in files]
        return await self._mutate_then_reload(
            job_id, lambda: self._photos.upload(job_id, parts), "Failed to upload photos"
        )

    async def remove_photo(self, job_id: str, photo_id: str) -> Job | None:
        """Delete remotely, detach locally, then reload the job.

        The local copy only loses the photo once the backend has deleted it.
        """
        try:
            await self._photos.delete(job_id, photo_id)
        except FAILURES as e:
            self._patch(error=describe(e, "Failed to remove photo"))
            raise

        self._detach_photo(job_id, photo_id)
        return await self.refresh(job_id)

    def _detach_photo(self, job_id: str, photo_id: str) -> None:
        job = self.find(job_id)
        if job is not None:
            self._replace(job.model_copy(update={"photos": [p for p in job.photos if p.id != photo_id]}))

    # ── totals ────────────────────────────────────────────

    def calculate_job_total(self, job) -> Decimal:
        return calculate_job_total(job, self._tax_rate)
