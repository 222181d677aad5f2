"""Fixed-interval scheduler for enrichment batches.

Every tick starts a batch as its own task and does NOT wait for it, so a slow
batch never delays the clock. Overlap is prevented downstream by the run guard
inside the batch handler: a tick that lands while a batch is still running
returns immediately.

Shutdown:
    stop() ends the ticker; run() then waits for in-flight batches to settle
    before returning, so no item is abandoned mid-merge.

Usage:
    scheduler = EnrichmentScheduler(run_batch, interval_seconds=5.0, logger=logger)
    task = asyncio.create_task(scheduler.run())
    ...
    scheduler.stop()
    await task
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from src.domain.protocols.logger_protocol import LoggerProtocol


class EnrichmentScheduler:
    """Fires ``run_batch`` every ``interval_seconds`` until stopped."""

    def __init__(
        self,
        run_batch: Callable[[], Awaitable[Any]],
        *,
        interval_seconds: float,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize scheduler.

        Args:
            run_batch: No-argument coroutine function that runs one batch.
            interval_seconds: Delay between ticks.
            logger: Structured logger.
        """
        self._run_batch = run_batch
        self._interval = interval_seconds
        self._logger = logger
        self._stopping = asyncio.Event()
        self._in_flight: set[asyncio.Task[Any]] = set()

    @property
    def in_flight(self) -> int:
        """Number of batch tasks that have not settled yet."""
        return len(self._in_flight)

    def tick(self) -> asyncio.Task[Any]:
        """Start one batch without waiting for it.

        Returns:
            The batch task (tracked until it settles).
        """
        task = asyncio.create_task(self._run_batch())
        self._in_flight.add(task)
        task.add_done_callback(self._on_batch_done)
        return task

    async def run(self) -> None:
        """Tick until stop() is called, then drain in-flight batches."""
        self._logger.info("enrichment_scheduler_started", interval_seconds=self._interval)

        while not self._stopping.is_set():
            self.tick()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)
            except TimeoutError:
                continue

        await self.drain()
        self._logger.info("enrichment_scheduler_stopped")

    def stop(self) -> None:
        """Ask run() to stop after the current wait."""
        self._stopping.set()

    async def drain(self) -> None:
        """Wait for every in-flight batch to settle."""
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    def _on_batch_done(self, task: asyncio.Task[Any]) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            # Batch handlers absorb item failures; this is a wiring bug
            self._logger.error(
                "enrichment_batch_crashed",
                error=exc if isinstance(exc, Exception) else None,
            )
