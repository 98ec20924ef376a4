"""Periodic health probes for the invoicing (Wave) and object storage (Cloudflare R2) integrations."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass, replace
from typing import Callable, Literal

from bremray.api.health import SERVICES, HealthApi

logger = logging.getLogger(__name__)

Status = Literal["connected", "disconnected", "checking"]

CHECK_INTERVAL_SECONDS = 5 * 60


@dataclass(frozen=True)
class ServiceStatus:
    wave: Status = "checking"
    cloudflare: Status = "checking"

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


class ServiceHealthMonitor:
    def __init__(self, health: HealthApi, interval: float = CHECK_INTERVAL_SECONDS):
        self._health = health
        self._interval = interval
        self._status = ServiceStatus()
        self._listeners: list[Callable[[ServiceStatus], None]] = []
        self._task: asyncio.Task | None = None

    @property
    def status(self) -> ServiceStatus:
        return self._status

    def subscribe(self, callback: Callable[[ServiceStatus], None]) -> Callable[[], None]:
        """Register a listener; it gets the current status immediately."""
        self._listeners.append(callback)
        callback(self._status)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _publish(self, service: str, status: Status) -> None:
        if getattr(self._status, service) == status:
            return
        self._status = replace(self._status, **{service: status})
        for callback in list(self._listeners):
            callback(self._status)

    async def check(self, service: str) -> bool:
        """Probe one integration. Any failure counts as disconnected."""
        if service not in SERVICES:
            raise ValueError(f"Unknown service {service!r}")
        self._publish(service, "checking")
        try:
            ok = await self._health.check(service)
        except Exception as e:
            logger.warning("%s health check failed: %s", service, e)
            ok = False
        self._publish(service, "connected" if ok else "disconnected")
        return ok

    async def check_wave(self) -> bool:
        return await self.check("wave")

    async def check_cloudflare(self) -> bool:
        return await self.check("cloudflare")

    async def check_all(self) -> ServiceStatus:
        await asyncio.gather(self.check_wave(), self.check_cloudflare())
        return self._status

    async def _run(self) -> None:
        while True:
            await self.check_all()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        """Check once now, then every ``interval`` seconds until ``stop()``."""
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
