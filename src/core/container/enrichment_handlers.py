"""Enrichment handler factories.

The batch handler is app-scoped (it owns the run guard). Work items are
processed concurrently, and an AsyncSession must never be shared between
tasks, so the queue drain and every storage step of an item get their own
short unit of work through the async context managers below. No scope stays
open while an item waits on the geolocation or weather APIs.

Usage:
    handler = get_run_enrichment_batch_handler()
    result = await handler.handle(RunEnrichmentBatch())
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.container.infrastructure import (
    get_database,
    get_geo_cache,
    get_geolocation_resolver,
    get_logger,
    get_weather_cache,
    get_weather_resolver,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.enrich_session_handler import (
        EnrichSessionHandler,
    )
    from src.application.commands.handlers.run_enrichment_batch_handler import (
        RunEnrichmentBatchHandler,
    )
    from src.domain.protocols.session_repository import SessionRepository
    from src.domain.protocols.work_queue_protocol import WorkQueue


@asynccontextmanager
async def work_queue_scope() -> AsyncIterator["WorkQueue"]:
    """Open a work queue bound to a fresh database session.

    Yields:
        WorkQueueRepository implementing WorkQueue.
    """
    from src.infrastructure.persistence.repositories import WorkQueueRepository

    async with get_database().get_session() as session:
        yield WorkQueueRepository(session=session)


@asynccontextmanager
async def session_repository_scope() -> AsyncIterator["SessionRepository"]:
    """Open a session repository bound to a fresh database session.

    Yields:
        SessionRepository implementation.
    """
    from src.infrastructure.persistence.repositories import SessionRepository

    async with get_database().get_session() as session:
        yield SessionRepository(session=session)


@asynccontextmanager
async def enrich_session_handler_scope() -> AsyncIterator["EnrichSessionHandler"]:
    """Provide a per-item EnrichSession handler.

    The handler opens its own storage scopes for the lookup and the merge.

    Yields:
        EnrichSessionHandler instance.
    """
    from src.application.commands.handlers.enrich_session_handler import (
        EnrichSessionHandler,
    )
    from src.application.services import GeoResolutionChain, WeatherResolutionChain

    settings = get_settings()
    logger = get_logger()

    yield EnrichSessionHandler(
        session_repo_provider=session_repository_scope,
        geo_chain=GeoResolutionChain(
            cache=get_geo_cache(),
            resolver=get_geolocation_resolver(),
            logger=logger,
            ttl_seconds=settings.geo_cache_ttl_seconds,
        ),
        weather_chain=WeatherResolutionChain(
            cache=get_weather_cache(),
            resolver=get_weather_resolver(),
            logger=logger,
            ttl_seconds=settings.weather_cache_ttl_seconds,
        ),
        logger=logger,
    )


@lru_cache()
def get_run_enrichment_batch_handler() -> "RunEnrichmentBatchHandler":
    """Get RunEnrichmentBatch handler singleton (app-scoped).

    One instance per process, so every scheduler tick shares the same guard.

    Returns:
        RunEnrichmentBatchHandler instance.
    """
    from src.application.commands.handlers.run_enrichment_batch_handler import (
        RunEnrichmentBatchHandler,
    )
    from src.application.services import RunGuard

    return RunEnrichmentBatchHandler(
        work_queue_provider=work_queue_scope,
        item_handler_provider=enrich_session_handler_scope,
        run_guard=RunGuard(),
        logger=get_logger(),
        max_concurrency=get_settings().enrichment_max_concurrency,
    )
