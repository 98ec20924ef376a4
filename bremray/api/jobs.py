"""Jobs resource with its item and phase sub-resources and the invoicing action."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bremray.api.client import ApiClient
from bremray.schemas import Job, JobCreate, JobStatus, JobUpdate


def to_job(raw: dict[str, Any]) -> Job:
    """Map a wire job onto the in-memory model.

    The backend flattens the external invoice into ``waveInvoiceId`` /
    ``waveInvoiceUrl``; in memory it is a single optional ``InvoiceRef``.
    """
    data = dict(raw)
    invoice_id = data.pop("waveInvoiceId", None)
    invoice_url = data.pop("waveInvoiceUrl", None)
    if invoice_id:
        data["invoice"] = {"id": invoice_id, "url": invoice_url or None}
    return Job.model_validate(data)


class JobsApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(
        self, status: JobStatus | str | None = None, customer_id: str | None = None
    ) -> list[Job]:
        params = {
            "status": JobStatus(status).value if status else None,
            "customerId": customer_id,
        }
        rows = await self._client.get("/jobs", params=params)
        return [to_job(r) for r in rows or []]

    async def get(self, job_id: str) -> Job:
        return to_job(await self._client.get(f"/jobs/{job_id}"))

    async def create(self, payload: JobCreate) -> Job:
        return to_job(await self._client.post("/jobs", payload.to_wire()))

    async def update(self, job_id: str, changes: JobUpdate) -> Job:
        return to_job(await self._client.put(f"/jobs/{job_id}", changes.to_wire()))

    async def delete(self, job_id: str) -> None:
        await self._client.delete(f"/jobs/{job_id}")

    # ── items ──────────────────────────────────────────────

    async def add_item(self, job_id: str, item_id: str, quantity: float) -> None:
        await self._client.post(f"/jobs/{job_id}/items", {"itemId": item_id, "quantity": quantity})

    async def update_item(
        self,
        job_id: str,
        item_id: str,
        quantity: float | None = None,
        installed_quantity: float | None = None,
    ) -> None:
        body: dict[str, Any] = {}
        if quantity is not None:
            body["quantity"] = quantity
        if installed_quantity is not None:
            body["installedQuantity"] = installed_quantity
        if not body:
            raise ValueError("update_item needs quantity or installed_quantity")
        await self._client.put(f"/jobs/{job_id}/items/{item_id}", body)

    async def remove_item(self, job_id: str, item_id: str) -> None:
        await self._client.delete(f"/jobs/{job_id}/items/{item_id}")

    # ── phases ─────────────────────────────────────────────

    async def update_phase(self, job_id: str, phase_id: str, is_completed: bool) -> None:
        completed_at = datetime.now(timezone.utc).isoformat() if is_completed else None
        await self._client.put(
            f"/jobs/{job_id}/phases/{phase_id}",
            {"isCompleted": is_completed, "completedAt": completed_at},
        )

    # ── invoicing ──────────────────────────────────────────

    async def send_to_invoicing(self, job_id: str) -> dict[str, Any]:
        """Push the job to Wave. Returns ``{invoiceNumber, invoiceUrl, message}``."""
        return await self._client.post(f"/jobs/{job_id}/send-to-wave")
