# catalog_sdk/container.py
from typing import Optional

import httpx

from .api import CatalogClient
from .cache import ProductCache
from .config import Settings
from .connectivity import ConnectivityMonitor
from .files import FileClient
from .pending import PendingOperationLog
from .service import ProductService
from .storage import JsonFileStorage
from .sync import SyncEngine


class CatalogApp:
    """
    Composition root: one instance per process, owning every long-lived
    service. ``async with CatalogApp() as app`` starts the health probe and
    guarantees it is stopped again.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        network_online: bool = True,
    ):
        self.settings = settings or Settings()
        s = self.settings

        self.backend = CatalogClient(
            base_url=s.api_base_url,
            timeout=s.request_timeout,
            probe_timeout=s.health_check_timeout,
            transport=transport,
        )
        self.files = FileClient(base_url=s.api_base_url, timeout=s.request_timeout)
        self.storage = storage if storage is not None else JsonFileStorage(s.storage_path)
        self.cache = ProductCache(self.storage)
        self.pending = PendingOperationLog(self.storage)
        self.monitor = ConnectivityMonitor(
            self.backend, interval=s.health_check_interval, network_online=network_online,
        )
        self.sync = SyncEngine(self.pending, self.backend, self.monitor)
        self.monitor.on_reconnect(self.sync.drain)
        self.products = ProductService(self.backend, self.monitor, self.cache, self.pending)

    async def start(self):
        # no reconnect edge fires for a log left over from a previous run
        await self.monitor.check_server_status()
        if len(self.pending):
            await self.sync.drain()
        self.monitor.start()

    async def stop(self):
        try:
            await self.monitor.stop()
        finally:
            await self.backend.aclose()
            self.files.close()

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *exc):
        await self.stop()
