"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_database, get_logger, ...

The container is organized into modules:
- infrastructure: Database, Redis, caches, resolvers, logging
- enrichment_handlers: Batch handler and per-item unit-of-work scopes
"""

from src.core.container.enrichment_handlers import (
    enrich_session_handler_scope,
    get_run_enrichment_batch_handler,
    session_repository_scope,
    work_queue_scope,
)
from src.core.container.infrastructure import (
    get_database,
    get_geo_cache,
    get_geolocation_resolver,
    get_logger,
    get_redis,
    get_weather_cache,
    get_weather_resolver,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_geo_cache",
    "get_geolocation_resolver",
    "get_logger",
    "get_redis",
    "get_weather_cache",
    "get_weather_resolver",
    # Enrichment
    "enrich_session_handler_scope",
    "get_run_enrichment_batch_handler",
    "session_repository_scope",
    "work_queue_scope",
    # Lifecycle
    "reset_container",
]


def reset_container() -> None:
    """Clear every cached singleton (tests, settings reload)."""
    from src.core.config import get_settings

    for factory in (
        get_settings,
        get_database,
        get_redis,
        get_geo_cache,
        get_weather_cache,
        get_geolocation_resolver,
        get_weather_resolver,
        get_logger,
        get_run_enrichment_batch_handler,
    ):
        factory.cache_clear()
