# tests/test_connectivity.py
import asyncio

import httpx

from catalog_sdk.connectivity import ConnectivityMonitor
from catalog_sdk.models import ConnectivityStatus

from conftest import FakeBackend


def _counting_callback():
    calls = []

    async def cb():
        calls.append(1)
    return cb, calls


def test_starts_online_and_reports_status():
    monitor = ConnectivityMonitor(FakeBackend())
    assert monitor.status == ConnectivityStatus(is_offline=False, is_server_available=True)


def test_probe_failures_all_mean_unavailable():
    async def run():
        results = []
        for healthy in (False, httpx.ConnectTimeout("slow"), httpx.ConnectError("refused")):
            monitor = ConnectivityMonitor(FakeBackend(healthy=healthy))
            results.append(await monitor.check_server_status())
        return results

    for status in asyncio.run(run()):
        assert status == ConnectivityStatus(is_offline=True, is_server_available=False)


def test_reconnect_edge_fires_once():
    backend = FakeBackend(healthy=False)
    monitor = ConnectivityMonitor(backend)
    cb, calls = _counting_callback()
    monitor.on_reconnect(cb)

    async def run():
        await monitor.check_server_status()
        assert monitor.is_offline
        backend.healthy = True
        await monitor.check_server_status()
        await monitor.check_server_status()
        await monitor.check_server_status()
        await monitor.stop()

    asyncio.run(run())
    assert calls == [1]


def test_overlapping_probes_report_one_edge():
    backend = FakeBackend(healthy=False)
    monitor = ConnectivityMonitor(backend)
    cb, calls = _counting_callback()
    monitor.on_reconnect(cb)

    async def run():
        await monitor.check_server_status()
        backend.healthy = True
        await asyncio.gather(monitor.check_server_status(), monitor.handle_online())
        await monitor.stop()

    asyncio.run(run())
    assert calls == [1]


def test_network_events():
    backend = FakeBackend()
    monitor = ConnectivityMonitor(backend)
    cb, calls = _counting_callback()
    monitor.on_reconnect(cb)

    async def run():
        status = monitor.handle_offline()
        assert status.is_offline and status.is_server_available
        # backend is fine but the network is down: still offline
        await monitor.check_server_status()
        assert monitor.is_offline
        assert calls == []

        probes_before = backend.health_calls
        await monitor.handle_online()
        assert backend.health_calls == probes_before + 1
        assert not monitor.is_offline
        await monitor.stop()

    asyncio.run(run())
    assert calls == [1]


def test_online_event_with_server_down_stays_offline():
    backend = FakeBackend()
    monitor = ConnectivityMonitor(backend)
    cb, calls = _counting_callback()
    monitor.on_reconnect(cb)

    async def run():
        monitor.handle_offline()
        backend.healthy = False
        status = await monitor.handle_online()
        assert status.is_offline and not status.is_server_available
        await monitor.stop()

    asyncio.run(run())
    assert calls == []


def test_failing_callback_does_not_break_monitor():
    backend = FakeBackend(healthy=False)
    monitor = ConnectivityMonitor(backend)

    async def boom():
        raise RuntimeError("drain exploded")

    ok, calls = _counting_callback()
    monitor.on_reconnect(boom)
    monitor.on_reconnect(ok)

    async def run():
        await monitor.check_server_status()
        backend.healthy = True
        await monitor.check_server_status()
        await monitor.stop()

    asyncio.run(run())
    assert calls == [1]
    assert not monitor.is_offline


def test_periodic_probe_runs_until_stopped():
    backend = FakeBackend()

    async def run():
        async with ConnectivityMonitor(backend, interval=0.01) as monitor:
            await asyncio.sleep(0.05)
            assert monitor._probe_task is not None
        assert monitor._probe_task is None
        probes = backend.health_calls
        await asyncio.sleep(0.03)
        return probes

    probes = asyncio.run(run())
    assert probes >= 2
    assert backend.health_calls == probes
