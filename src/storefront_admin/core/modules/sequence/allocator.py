"""Client-side sequential numbering for display ids and ordering slots."""

import asyncio
from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager

import structlog

from storefront_admin.core.modules.records.models import Table
from storefront_admin.core.modules.records.service import RecordService
from storefront_admin.errors import FetchError

logger = structlog.get_logger(__name__)


def next_sequence_value(values: Iterable[int | None], start: int = 1) -> int:
    """Return max(values) + 1, counting missing values as 0, or `start` if there are none."""
    seen = [value or 0 for value in values]
    if not seen:
        return start
    return max(seen) + 1


class SequenceAllocator:
    """Hands out the next human-facing number for new records in one table.

    The next value is computed by scanning `field` over the whole table and
    cached in memory, so consecutive creations do not rescan. The cache only
    moves forward after a successful creation: a failed insert leaves the
    same value for the next attempt, and deletions are never reused.

    Two allocators in different processes that scan the same state will
    compute the same value. A unique index on `field` is what stops the
    second insert; callers should `invalidate()` when that happens.
    """

    def __init__(self, records: RecordService, table: Table, field: str, start: int = 1) -> None:
        self._records = records
        self.table = table
        self.field = field
        self.start = start
        self._next: int | None = None
        self._lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._next is not None

    async def initialize(self) -> int:
        """Rescan the table and reset the cached next value.

        Waits for an in-flight reservation, so the scan always sees its insert.

        Raises:
            FetchError: If the scan fails. The allocator is left uninitialized.
        """
        async with self._lock:
            return await self._scan()

    async def _scan(self) -> int:
        # Caller holds self._lock
        try:
            docs = await self._records.select(self.table, fields=[self.field])
        except FetchError:
            self._next = None
            raise
        next_value = next_sequence_value((doc.get(self.field) for doc in docs), self.start)
        self._next = next_value
        logger.debug("sequence_initialized", table=self.table, field=self.field, scanned=len(docs), next=next_value)
        return next_value

    def allocate(self) -> int:
        """Return the cached next value without rescanning."""
        if self._next is None:
            raise RuntimeError(f"Sequence for {self.table}.{self.field} is not initialized")
        return self._next

    def on_create_success(self) -> None:
        """Advance past the value just used by a successful creation."""
        if self._next is None:
            raise RuntimeError(f"Sequence for {self.table}.{self.field} is not initialized")
        self._next += 1

    def invalidate(self) -> None:
        """Drop the cached value so the next reservation rescans."""
        self._next = None

    @asynccontextmanager
    async def reserve(self) -> AsyncGenerator[int]:
        """Yield the next value for one creation.

        The cache advances only if the block exits cleanly. Creations through
        the same allocator are serialized, so they never share a value.
        """
        async with self._lock:
            if self._next is None:
                await self._scan()
            value = self.allocate()
            yield value
            self.on_create_success()
            logger.debug("sequence_allocated", table=self.table, field=self.field, value=value)
