"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL, SQLite for local runs)
- Redis (only when CACHE_BACKEND=redis)
- Enrichment caches (SQL tables or Redis)
- External resolvers (geolocation, weather)
- Logging (structlog console/JSON)

Adapter selection happens here and nowhere else (composition root). Call
``cache_clear()`` on a factory (or reset_container()) after changing settings
in tests.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.enums import CacheBackend, Environment
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.enrichment_cache_protocol import GeoCache, WeatherCache
    from src.domain.protocols.enrichment_resolver_protocol import (
        GeolocationResolver,
        WeatherResolver,
    )
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.infrastructure.cache.redis_adapter import RedisAdapter


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance. Open units of work with
        ``get_database().get_session()``.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
    )


@lru_cache()
def get_redis() -> "RedisAdapter":
    """Get Redis adapter singleton (app-scoped).

    Connection pool is shared across the whole worker.

    Returns:
        RedisAdapter wrapping a pooled async client.

    Raises:
        RuntimeError: If REDIS_URL is not configured.
    """
    from redis.asyncio import ConnectionPool, Redis

    from src.infrastructure.cache.redis_adapter import RedisAdapter

    settings = get_settings()
    if not settings.redis_url:
        raise RuntimeError("REDIS_URL is required for the redis cache backend")

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    return RedisAdapter(redis_client=Redis(connection_pool=pool))


@lru_cache()
def get_geo_cache() -> "GeoCache":
    """Get geolocation cache singleton (app-scoped).

    Returns adapter based on CACHE_BACKEND:
        - 'database': GeoCacheRepository (geo_cache table)
        - 'redis': RedisGeoCache

    Returns:
        Cache implementing GeoCache.
    """
    settings = get_settings()

    if settings.cache_backend == CacheBackend.REDIS:
        from src.core.constants import CACHE_KEY_PREFIX
        from src.infrastructure.cache import CacheKeys, RedisGeoCache

        return RedisGeoCache(get_redis(), CacheKeys(prefix=CACHE_KEY_PREFIX))

    from src.infrastructure.persistence.repositories import GeoCacheRepository

    return GeoCacheRepository(get_database().get_session)


@lru_cache()
def get_weather_cache() -> "WeatherCache":
    """Get weather cache singleton (app-scoped).

    Returns adapter based on CACHE_BACKEND:
        - 'database': WeatherCacheRepository (weather_cache table)
        - 'redis': RedisWeatherCache

    Returns:
        Cache implementing WeatherCache.
    """
    settings = get_settings()

    if settings.cache_backend == CacheBackend.REDIS:
        from src.core.constants import CACHE_KEY_PREFIX
        from src.infrastructure.cache import CacheKeys, RedisWeatherCache

        return RedisWeatherCache(get_redis(), CacheKeys(prefix=CACHE_KEY_PREFIX))

    from src.infrastructure.persistence.repositories import WeatherCacheRepository

    return WeatherCacheRepository(get_database().get_session)


@lru_cache()
def get_geolocation_resolver() -> "GeolocationResolver":
    """Get geolocation HTTP client singleton (app-scoped).

    Returns:
        IPGeolocationClient implementing GeolocationResolver.
    """
    from src.infrastructure.enrichers import IPGeolocationClient

    settings = get_settings()
    return IPGeolocationClient(
        base_url=settings.geolocation_api_url,
        api_key=settings.geolocation_api_key,
        timeout=settings.enrichment_http_timeout,
    )


@lru_cache()
def get_weather_resolver() -> "WeatherResolver":
    """Get weather HTTP client singleton (app-scoped).

    Returns:
        OpenWeatherClient implementing WeatherResolver.
    """
    from src.infrastructure.enrichers import OpenWeatherClient

    settings = get_settings()
    return OpenWeatherClient(
        base_url=settings.weather_api_url,
        api_key=settings.weather_api_key,
        units=settings.weather_units,
        timeout=settings.enrichment_http_timeout,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)
