# catalog_sdk/sync.py
import logging
from enum import Enum

import httpx

from .models import OperationType, PendingOperation, SyncReport

logger = logging.getLogger(__name__)


class DrainState(str, Enum):
    IDLE = "idle"
    DRAINING = "draining"


class SyncEngine:
    """
    Replays the pending log against the backend.

    One drain at a time: the state flips to DRAINING before the first await
    and back to IDLE in ``finally``. Operations run in the order drain_all()
    returned them; a failed one goes back to the tail of the log and the rest
    of the batch carries on. No retry cap and no backoff: a failing operation
    is retried on every later drain.
    """

    def __init__(self, log, backend, monitor=None):
        self._log = log
        self._backend = backend
        self._monitor = monitor
        self._state = DrainState.IDLE

    @property
    def state(self) -> DrainState:
        return self._state

    async def drain(self) -> SyncReport:
        if self._state is DrainState.DRAINING:
            logger.debug("Drain already running, trigger ignored")
            return SyncReport(skipped=True)
        if self._monitor is not None and self._monitor.is_offline:
            logger.debug("Still offline, drain skipped")
            return SyncReport(skipped=True)

        self._state = DrainState.DRAINING
        try:
            operations = self._log.drain_all()
            report = SyncReport()
            if operations:
                logger.info("Syncing %d pending operation(s)", len(operations))
            for i, op in enumerate(operations):
                if op.type is not OperationType.CREATE and op.product_id is None:
                    logger.error("Dropping %s without a product id: %r", op.type.value, op.product)
                    report.dropped.append(op)
                    continue
                try:
                    await self._replay(op)
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("Failed to sync %s for product %s: %s", op.type.value, op.product_id, e)
                    self._log.append(op)
                    report.failed.append(op)
                except BaseException:
                    # anything else is a bug or a cancellation: put back what was not replayed, then propagate
                    for rest in operations[i:]:
                        self._log.append(rest)
                    raise
                else:
                    report.synced.append(op)
            if operations:
                logger.info(
                    "Sync finished: %d synced, %d re-queued, %d dropped",
                    len(report.synced), len(report.failed), len(report.dropped),
                )
            return report
        finally:
            self._state = DrainState.IDLE

    async def _replay(self, op: PendingOperation) -> None:
        if op.type is OperationType.CREATE:
            await self._backend.create_product(op.product)
        elif op.type is OperationType.UPDATE:
            await self._backend.update_product(op.product_id, op.product)
        elif op.type is OperationType.DELETE:
            await self._backend.delete_product(op.product_id)
