"""Job photo sub-resource. The backend stores the files in object storage (R2)."""

from __future__ import annotations

from bremray.api.client import ApiClient
from bremray.schemas import JobPhoto


class PhotosApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def upload(self, job_id: str, files: list[tuple[str, bytes, str]]) -> list[JobPhoto]:
        """Upload ``(filename, data, content_type)`` tuples in one multipart request."""
        rows = await self._client.upload(f"/jobs/{job_id}/photos", files)
        return [JobPhoto.model_validate(r) for r in rows or []]

    async def delete(self, job_id: str, photo_id: str) -> None:
        await self._client.delete(f"/jobs/{job_id}/photos/{photo_id}")
