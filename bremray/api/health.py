"""Backend health probes for the external integrations."""

from __future__ import annotations

from bremray.api.client import ApiClient

SERVICES = ("wave", "cloudflare")


class HealthApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def check(self, service: str) -> bool:
        """True when the backend reports the integration reachable. Raises ApiError otherwise."""
        if service not in SERVICES:
            raise ValueError(f"Unknown service {service!r}")
        await self._client.get(f"/health/{service}")
        return True
