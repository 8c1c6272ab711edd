"""Group sub-record writes into batches under the store's per-batch ceiling."""

from __future__ import annotations

import logging

from stackmatch.models import CompatibilityRecord
from stackmatch.storage.base import CompatibilityStorePort

logger = logging.getLogger(__name__)

# Common backends reject batches above 500 operations and fail the whole write.
MAX_BATCH_OPERATIONS = 450


class BatchWriter:
    """Accumulate records and commit them in batches of at most ``max_ops``.

    A batch is flushed as soon as it reaches ``max_ops`` pending records;
    call :meth:`flush` once more after the last :meth:`add` for the remainder.
    """

    def __init__(
        self,
        store: CompatibilityStorePort,
        max_ops: int = MAX_BATCH_OPERATIONS,
    ) -> None:
        if max_ops < 1:
            raise ValueError("max_ops must be at least 1")
        self._store = store
        self._max_ops = max_ops
        self._pending: list[CompatibilityRecord] = []
        self.writes = 0
        self.flushes = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def add(self, record: CompatibilityRecord) -> None:
        self._pending.append(record)
        if len(self._pending) >= self._max_ops:
            await self.flush()

    async def flush(self) -> None:
        if not self._pending:
            return
        batch = self._pending
        self._pending = []
        await self._store.commit(batch)
        self.writes += len(batch)
        self.flushes += 1
        logger.debug("Committed batch of %d compatibility records", len(batch))
