# catalog_sdk/pending.py
import logging
from typing import List

from pydantic import ValidationError as ModelError

from .models import PendingOperation

logger = logging.getLogger(__name__)

PENDING_KEY = "pending_operations"


class PendingOperationLog:
    """
    Persisted FIFO of mutations that still have to reach the backend.

    Every call re-reads the persisted queue, so a re-append from a failed
    drain never clobbers operations appended while that drain was running.
    """

    def __init__(self, storage, key: str = PENDING_KEY):
        self._storage = storage
        self._key = key

    def _load(self) -> List[PendingOperation]:
        raw = self._storage.get(self._key)
        if not raw:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed pending queue (%s)", type(raw).__name__)
            return []
        ops = []
        for item in raw:
            try:
                ops.append(PendingOperation.model_validate(item))
            except ModelError as e:
                # an unreadable entry can never be replayed; keep the rest
                logger.error("Discarding unreadable pending operation %r: %s", item, e)
        return ops

    def _save(self, ops: List[PendingOperation]) -> None:
        self._storage.set(self._key, [op.model_dump(mode="json") for op in ops])

    def append(self, op: PendingOperation) -> None:
        ops = self._load()
        ops.append(op)
        self._save(ops)
        logger.debug("Queued %s for product %s (%d pending)", op.type.value, op.product_id, len(ops))

    def drain_all(self) -> List[PendingOperation]:
        ops = self._load()
        self._save([])
        return ops

    def peek(self) -> List[PendingOperation]:
        return self._load()

    def __len__(self) -> int:
        return len(self._load())
