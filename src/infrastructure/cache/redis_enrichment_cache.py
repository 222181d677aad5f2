"""Redis implementations of the GeoCache and WeatherCache protocols.

Alternative to the SQL cache tables (CACHE_BACKEND=redis). Entries are JSON
objects written with SET NX, so the first writer wins. Keys carry no TTL;
the expiry is stored inside the value as "expires_at" (ISO 8601) and is
advisory, so stale entries keep being served like the SQL tables do.

Architecture:
- Implements GeoCache/WeatherCache without inheritance (structural typing)
- Built on RedisAdapter (Result types, CacheError)
"""

from datetime import datetime
from typing import Any

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot
from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


def _entry(snapshot: dict[str, Any], expires_at: datetime) -> dict[str, Any]:
    return {**snapshot, "expires_at": expires_at.isoformat()}


def _malformed(key: str, error: Exception) -> CacheError:
    return CacheError(
        code=ErrorCode.CACHE_READ_FAILED,
        infrastructure_code=InfrastructureErrorCode.CACHE_DECODE_ERROR,
        message=f"Cached entry for key '{key}' is malformed",
        details={"key": key, "error": str(error)},
    )


class RedisGeoCache:
    """Geolocation cache stored under {prefix}:geo:{ip_address}."""

    def __init__(self, adapter: RedisAdapter, keys: CacheKeys) -> None:
        """Initialize cache.

        Args:
            adapter: Redis adapter.
            keys: Key builder.
        """
        self._adapter = adapter
        self._keys = keys

    async def get(self, ip_address: str) -> Result[GeoSnapshot | None, CacheError]:
        """Look up a cached geolocation.

        Args:
            ip_address: Source address.

        Returns:
            Success(GeoSnapshot) on hit, Success(None) on miss, or CacheError.
        """
        key = self._keys.geo(ip_address)
        match await self._adapter.get_json(key):
            case Success(value=None):
                return Success(value=None)
            case Success(value=data):
                try:
                    return Success(value=GeoSnapshot.from_dict(data))
                except (KeyError, TypeError, ValueError) as e:
                    return Failure(error=_malformed(key, e))
            case Failure(error=err):
                return Failure(error=err)
            case _:
                return Success(value=None)

    async def put(
        self,
        ip_address: str,
        geo: GeoSnapshot,
        *,
        expires_at: datetime,
    ) -> Result[None, CacheError]:
        """Insert an entry unless the address is already cached.

        Args:
            ip_address: Source address.
            geo: Resolved geolocation.
            expires_at: Advisory expiry, stored in the entry.

        Returns:
            Success(None), or CacheError.
        """
        result = await self._adapter.set_json_if_absent(
            self._keys.geo(ip_address),
            _entry(geo.to_dict(), expires_at),
        )
        if isinstance(result, Failure):
            return Failure(error=result.error)
        return Success(value=None)


class RedisWeatherCache:
    """Weather cache stored under {prefix}:weather:{longitude},{latitude}."""

    def __init__(self, adapter: RedisAdapter, keys: CacheKeys) -> None:
        """Initialize cache.

        Args:
            adapter: Redis adapter.
            keys: Key builder.
        """
        self._adapter = adapter
        self._keys = keys

    async def get(
        self, coordinates: str
    ) -> Result[WeatherSnapshot | None, CacheError]:
        """Look up cached weather.

        Args:
            coordinates: "{longitude},{latitude}" key.

        Returns:
            Success(WeatherSnapshot) on hit, Success(None) on miss, or CacheError.
        """
        key = self._keys.weather(coordinates)
        match await self._adapter.get_json(key):
            case Success(value=None):
                return Success(value=None)
            case Success(value=data):
                try:
                    return Success(value=WeatherSnapshot.from_dict(data))
                except (KeyError, TypeError, ValueError) as e:
                    return Failure(error=_malformed(key, e))
            case Failure(error=err):
                return Failure(error=err)
            case _:
                return Success(value=None)

    async def put(
        self,
        coordinates: str,
        weather: WeatherSnapshot,
        *,
        expires_at: datetime,
    ) -> Result[None, CacheError]:
        """Insert an entry unless the coordinates are already cached.

        Args:
            coordinates: "{longitude},{latitude}" key.
            weather: Resolved weather.
            expires_at: Advisory expiry, stored in the entry.

        Returns:
            Success(None), or CacheError.
        """
        result = await self._adapter.set_json_if_absent(
            self._keys.weather(coordinates),
            _entry(weather.to_dict(), expires_at),
        )
        if isinstance(result, Failure):
            return Failure(error=result.error)
        return Success(value=None)
