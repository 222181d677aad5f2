"""Enrichment worker entry point.

Lifecycle:
    startup  -> log configuration summary
    run      -> scheduler ticks a batch every ENRICHMENT_INTERVAL_SECONDS
    SIGINT/SIGTERM -> stop ticking, drain in-flight batches
    shutdown -> dispose database pool, close Redis

The CLI (src/presentation/cli/app.py) is the usual way in; these coroutines
are also usable from other asyncio programs.
"""

import asyncio
import signal
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.application.commands import RunEnrichmentBatch
from src.application.commands.handlers.run_enrichment_batch_handler import (
    EnrichmentBatchSummary,
)
from src.core.config import get_settings
from src.core.container import (
    get_database,
    get_logger,
    get_redis,
    get_run_enrichment_batch_handler,
)
from src.core.enums import CacheBackend
from src.core.result import Result
from src.infrastructure.jobs import EnrichmentScheduler


@asynccontextmanager
async def lifespan() -> AsyncIterator[None]:
    """Worker lifespan context manager.

    Yields:
        None during worker lifetime.
    """
    settings = get_settings()
    logger = get_logger()

    logger.info(
        "worker_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
        cache_backend=settings.cache_backend.value,
    )

    try:
        yield
    finally:
        await get_database().close()
        if settings.cache_backend == CacheBackend.REDIS:
            await get_redis().close()
        logger.info("worker_stopped")


async def run_batch() -> Result[EnrichmentBatchSummary, str]:
    """Run one enrichment batch (the scheduler's trigger surface).

    Returns:
        Batch handler result.
    """
    handler = get_run_enrichment_batch_handler()
    return await handler.handle(RunEnrichmentBatch())


async def run_worker(*, interval_seconds: float | None = None) -> None:
    """Run the scheduler until SIGINT/SIGTERM.

    Args:
        interval_seconds: Override for ENRICHMENT_INTERVAL_SECONDS.
    """
    settings = get_settings()
    interval = interval_seconds or settings.enrichment_interval_seconds

    async with lifespan():
        scheduler = EnrichmentScheduler(
            run_batch,
            interval_seconds=interval,
            logger=get_logger(),
        )

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, scheduler.stop)

        try:
            await scheduler.run()
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)


async def run_once() -> Result[EnrichmentBatchSummary, str]:
    """Run a single batch inside the worker lifespan.

    Returns:
        Batch handler result.
    """
    async with lifespan():
        return await run_batch()
