"""Run guard preventing overlapping enrichment batches.

A scheduler tick that arrives while a batch is still in flight must not start
a second batch. The guard is held for the full batch, including every
dispatched work item, and released only after they all settle.

Usage:
    guard = RunGuard()
    async with guard.hold() as acquired:
        if not acquired:
            return  # previous batch still running
        await run_batch()
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RunGuard:
    """Non-blocking, in-process mutual exclusion for batch runs."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        """Whether a batch currently holds the guard."""
        return self._lock.locked()

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[bool]:
        """Try to take the guard without waiting.

        Yields:
            True if this caller holds the guard for the block, False if another
            batch already holds it (the block should return immediately).
        """
        if self._lock.locked():
            yield False
            return

        await self._lock.acquire()
        try:
            yield True
        finally:
            self._lock.release()
