"""Cache infrastructure package.

Redis-backed alternative to the SQL cache tables. All cache dependencies are
managed through src.core.container.

Architecture:
- RedisAdapter: Result-returning wrapper around redis.asyncio
- RedisGeoCache / RedisWeatherCache: GeoCache / WeatherCache implementations
- CacheKeys: Key construction
"""

from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.cache.redis_enrichment_cache import (
    RedisGeoCache,
    RedisWeatherCache,
)

__all__ = [
    "CacheKeys",
    "RedisAdapter",
    "RedisGeoCache",
    "RedisWeatherCache",
]
