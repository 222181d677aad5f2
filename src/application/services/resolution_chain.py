"""Cache-aside resolution chains for geolocation and weather.

Each chain answers "what do we know about X" for one data source:

    cache hit  -> cached snapshot (stale entries included, no TTL check)
    cache miss -> external lookup -> insert-if-absent into cache -> snapshot
    lookup failure -> None

Failures never escape a chain: storage and resolver errors are logged and the
caller receives either a snapshot or None.

Architecture:
- Application service (composes cache + resolver ports)
- NO infrastructure imports (adapters are injected)
- The weather chain takes a GeoSnapshot, so it cannot run before geo resolves
"""

from datetime import UTC, datetime, timedelta

from src.core.constants import GEO_CACHE_TTL_SECONDS, WEATHER_CACHE_TTL_SECONDS
from src.core.result import Failure, Success
from src.domain.protocols.enrichment_cache_protocol import GeoCache, WeatherCache
from src.domain.protocols.enrichment_resolver_protocol import (
    GeolocationResolver,
    WeatherResolver,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot


class GeoResolutionChain:
    """Resolve an IP address to a GeoSnapshot (cache first, then API).

    Args:
        cache: Geolocation cache keyed by IP address.
        resolver: External geolocation lookup.
        logger: Structured logger.
        ttl_seconds: Freshness window written with new cache entries.
    """

    def __init__(
        self,
        cache: GeoCache,
        resolver: GeolocationResolver,
        logger: LoggerProtocol,
        ttl_seconds: int = GEO_CACHE_TTL_SECONDS,
    ) -> None:
        self._cache = cache
        self._resolver = resolver
        self._logger = logger
        self._ttl = timedelta(seconds=ttl_seconds)

    async def resolve(self, ip_address: str) -> GeoSnapshot | None:
        """Return the location for an address, or None when unresolvable.

        Args:
            ip_address: Client source address.

        Returns:
            GeoSnapshot from cache or a fresh lookup; None on lookup failure.
        """
        match await self._cache.get(ip_address):
            case Success(value=GeoSnapshot() as cached):
                self._logger.debug("geo_cache_hit", ip_address=ip_address)
                return cached
            case Failure(error=err):
                # Unreadable cache counts as a miss
                self._logger.warning(
                    "geo_cache_read_failed",
                    ip_address=ip_address,
                    error=str(err),
                )

        lookup = await self._resolver.lookup(ip_address)
        if isinstance(lookup, Failure):
            self._logger.warning(
                "geolocation_lookup_failed",
                ip_address=ip_address,
                error=str(lookup.error),
            )
            return None
        geo = lookup.value

        expires_at = datetime.now(UTC) + self._ttl
        put_result = await self._cache.put(ip_address, geo, expires_at=expires_at)
        if isinstance(put_result, Failure):
            self._logger.warning(
                "geo_cache_write_failed",
                ip_address=ip_address,
                error=str(put_result.error),
            )

        return geo


class WeatherResolutionChain:
    """Resolve a GeoSnapshot's coordinates to current weather.

    Args:
        cache: Weather cache keyed by "{longitude},{latitude}".
        resolver: External weather lookup.
        logger: Structured logger.
        ttl_seconds: Freshness window written with new cache entries.
    """

    def __init__(
        self,
        cache: WeatherCache,
        resolver: WeatherResolver,
        logger: LoggerProtocol,
        ttl_seconds: int = WEATHER_CACHE_TTL_SECONDS,
    ) -> None:
        self._cache = cache
        self._resolver = resolver
        self._logger = logger
        self._ttl = timedelta(seconds=ttl_seconds)

    async def resolve(self, geo: GeoSnapshot) -> WeatherSnapshot | None:
        """Return current weather at the location, or None when unresolvable.

        Args:
            geo: Resolved geolocation (never None; callers short-circuit).

        Returns:
            WeatherSnapshot from cache or a fresh lookup; None on lookup failure.
        """
        key = geo.coordinates_key

        match await self._cache.get(key):
            case Success(value=WeatherSnapshot() as cached):
                self._logger.debug("weather_cache_hit", coordinates=key)
                return cached
            case Failure(error=err):
                self._logger.warning(
                    "weather_cache_read_failed",
                    coordinates=key,
                    error=str(err),
                )

        lookup = await self._resolver.current(geo.latitude, geo.longitude)
        if isinstance(lookup, Failure):
            self._logger.warning(
                "weather_lookup_failed",
                coordinates=key,
                error=str(lookup.error),
            )
            return None
        weather = lookup.value

        expires_at = datetime.now(UTC) + self._ttl
        put_result = await self._cache.put(key, weather, expires_at=expires_at)
        if isinstance(put_result, Failure):
            self._logger.warning(
                "weather_cache_write_failed",
                coordinates=key,
                error=str(put_result.error),
            )

        return weather
