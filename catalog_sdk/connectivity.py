# catalog_sdk/connectivity.py
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set

import httpx

from .models import ConnectivityStatus

logger = logging.getLogger(__name__)

ReconnectCallback = Callable[[], Awaitable[Any]]


class ConnectivityMonitor:
    """
    Network state plus backend reachability.

    ``status`` is answered from cached state. It is refreshed by the periodic
    health probe (start/stop) and by handle_online/handle_offline, which the
    host wires to whatever network notifications it has. Every offline -> online
    edge schedules each reconnect callback exactly once.
    """

    def __init__(self, backend, interval: float = 30.0, network_online: bool = True):
        self._backend = backend
        self.interval = interval
        self._network_online = network_online
        self._server_available = True
        self._was_offline = self.is_offline
        self._callbacks: List[ReconnectCallback] = []
        self._probe_task: Optional[asyncio.Task] = None
        self._scheduled: Set[asyncio.Task] = set()

    @property
    def network_online(self) -> bool:
        return self._network_online

    @property
    def is_offline(self) -> bool:
        return not self._network_online or not self._server_available

    @property
    def status(self) -> ConnectivityStatus:
        return ConnectivityStatus(is_offline=self.is_offline, is_server_available=self._server_available)

    def on_reconnect(self, callback: ReconnectCallback) -> None:
        self._callbacks.append(callback)

    async def check_server_status(self) -> ConnectivityStatus:
        try:
            self._server_available = await self._backend.health()
        except (httpx.HTTPError, OSError) as e:
            logger.debug("Health probe failed: %s", e)
            self._server_available = False
        self._note_transition()
        return self.status

    async def handle_online(self) -> ConnectivityStatus:
        self._network_online = True
        return await self.check_server_status()

    def handle_offline(self) -> ConnectivityStatus:
        self._network_online = False
        self._note_transition()
        return self.status

    def _note_transition(self) -> None:
        # compared against the last reported state, not a value captured before
        # an await, so overlapping probes cannot report the same edge twice
        offline = self.is_offline
        if offline == self._was_offline:
            return
        self._was_offline = offline
        if offline:
            logger.warning("Connection lost; working offline")
            return
        logger.info("Connection restored")
        for cb in self._callbacks:
            task = asyncio.get_running_loop().create_task(cb())
            self._scheduled.add(task)
            task.add_done_callback(self._reconnect_done)

    def _reconnect_done(self, task: asyncio.Task) -> None:
        self._scheduled.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Reconnect callback failed", exc_info=exc)

    async def _run(self):
        while True:
            await self.check_server_status()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self._probe_task is None or self._probe_task.done():
            self._probe_task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._probe_task = self._probe_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        # reconnect work is not cancellable; let it finish
        if self._scheduled:
            await asyncio.gather(*list(self._scheduled), return_exceptions=True)

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, *exc):
        await self.stop()
