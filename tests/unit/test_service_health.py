import asyncio

import pytest

from bremray.api import ApiError
from bremray.services.service_health import ServiceHealthMonitor, ServiceStatus


class FakeHealth:
    def __init__(self, **results):
        self.results = results
        self.calls = []

    async def check(self, service):
        self.calls.append(service)
        result = self.results.get(service, True)
        if isinstance(result, Exception):
            raise result
        return result


async def test_initial_status_is_checking():
    monitor = ServiceHealthMonitor(FakeHealth())
    seen = []
    monitor.subscribe(seen.append)
    assert seen == [ServiceStatus("checking", "checking")]


async def test_check_all_reports_each_service():
    monitor = ServiceHealthMonitor(FakeHealth(cloudflare=ApiError(503, "cloudflare unavailable")))
    status = await monitor.check_all()
    assert status.as_dict() == {"wave": "connected", "cloudflare": "disconnected"}


async def test_any_exception_counts_as_disconnected():
    monitor = ServiceHealthMonitor(FakeHealth(wave=RuntimeError("boom")))
    assert await monitor.check_wave() is False
    assert monitor.status.wave == "disconnected"


async def test_listeners_only_notified_on_change():
    health = FakeHealth()
    monitor = ServiceHealthMonitor(health)
    seen = []
    monitor.subscribe(seen.append)

    await monitor.check_wave()
    await monitor.check_wave()
    assert [s.wave for s in seen] == ["checking", "connected", "checking", "connected"]

    seen.clear()
    health.results["cloudflare"] = False
    await monitor.check_cloudflare()
    assert [s.cloudflare for s in seen] == ["disconnected"]


async def test_unsubscribe_stops_notifications():
    monitor = ServiceHealthMonitor(FakeHealth())
    seen = []
    unsubscribe = monitor.subscribe(seen.append)
    unsubscribe()
    await monitor.check_all()
    assert len(seen) == 1


async def test_start_checks_immediately_and_stop_cancels():
    health = FakeHealth()
    monitor = ServiceHealthMonitor(health, interval=3600)
    monitor.start()
    for _ in range(10):
        await asyncio.sleep(0)
    await monitor.stop()

    assert sorted(health.calls) == ["cloudflare", "wave"]
    assert monitor.status == ServiceStatus("connected", "connected")


async def test_unknown_service_rejected():
    monitor = ServiceHealthMonitor(FakeHealth())
    with pytest.raises(ValueError, match="stripe"):
        await monitor.check("stripe")
    assert monitor.status == ServiceStatus()
