"""Integration tests for the SQL geolocation and weather caches.

Tests cover:
- Miss returns Success(None)
- put then get returns the stored snapshot
- First writer wins (insert-if-absent)
- Expired entries are still served (expiry is advisory)
- Storage failures surface as DatabaseError, not exceptions
- Pool exhaustion is reported as a connection failure
"""

from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import DatabaseError
from src.infrastructure.persistence.repositories import (
    GeoCacheRepository,
    WeatherCacheRepository,
)


def _in(hours: float) -> datetime:
    return datetime.now(UTC) + timedelta(hours=hours)


@asynccontextmanager
async def _exhausted_pool():
    raise PoolTimeoutError("QueuePool limit of size 5 overflow 0 reached")
    yield


@pytest.mark.integration
class TestGeoCacheRepository:
    @pytest.mark.asyncio
    async def test_miss(self, database):
        cache = GeoCacheRepository(database.get_session)

        assert await cache.get("8.8.8.8") == Success(value=None)

    @pytest.mark.asyncio
    async def test_put_then_get(self, database, sample_geo):
        cache = GeoCacheRepository(database.get_session)

        assert await cache.put("8.8.8.8", sample_geo, expires_at=_in(24)) == Success(
            value=None
        )

        assert await cache.get("8.8.8.8") == Success(value=sample_geo)

    @pytest.mark.asyncio
    async def test_first_writer_wins(self, database, sample_geo):
        cache = GeoCacheRepository(database.get_session)
        other = GeoSnapshot(latitude=48.1374, longitude=11.5755, city="Munich")

        await cache.put("8.8.8.8", sample_geo, expires_at=_in(24))
        second = await cache.put("8.8.8.8", other, expires_at=_in(24))

        assert isinstance(second, Success)
        assert await cache.get("8.8.8.8") == Success(value=sample_geo)

    @pytest.mark.asyncio
    async def test_expired_entry_still_served(self, database, sample_geo):
        cache = GeoCacheRepository(database.get_session)
        await cache.put("8.8.8.8", sample_geo, expires_at=_in(-48))

        assert await cache.get("8.8.8.8") == Success(value=sample_geo)

    @pytest.mark.asyncio
    async def test_storage_failure_is_a_result(self, database):
        cache = GeoCacheRepository(database.get_session)
        await database.drop_all()

        result = await cache.get("8.8.8.8")

        assert isinstance(result, Failure)
        assert isinstance(result.error, DatabaseError)
        assert result.error.code == ErrorCode.CACHE_READ_FAILED
        assert result.error.infrastructure_code == InfrastructureErrorCode.DATABASE_ERROR

    @pytest.mark.asyncio
    async def test_pool_timeout_is_connection_failure(self):
        cache = GeoCacheRepository(_exhausted_pool)

        result = await cache.get("8.8.8.8")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CACHE_READ_FAILED
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
        )


@pytest.mark.integration
class TestWeatherCacheRepository:
    @pytest.mark.asyncio
    async def test_put_then_get(self, database, sample_geo, sample_weather):
        cache = WeatherCacheRepository(database.get_session)
        key = sample_geo.coordinates_key

        assert await cache.get(key) == Success(value=None)
        await cache.put(key, sample_weather, expires_at=_in(3))

        assert await cache.get(key) == Success(value=sample_weather)

    @pytest.mark.asyncio
    async def test_first_writer_wins_and_stale_served(
        self, database, sample_geo, sample_weather
    ):
        cache = WeatherCacheRepository(database.get_session)
        key = sample_geo.coordinates_key
        rain = WeatherSnapshot(type="Rain", temperature=9.5, icon="10d")

        await cache.put(key, sample_weather, expires_at=_in(-6))
        await cache.put(key, rain, expires_at=_in(3))

        assert await cache.get(key) == Success(value=sample_weather)

    @pytest.mark.asyncio
    async def test_write_failure_is_a_result(self, database, sample_weather):
        cache = WeatherCacheRepository(database.get_session)
        await database.drop_all()

        result = await cache.put("1.0,2.0", sample_weather, expires_at=_in(3))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CACHE_WRITE_FAILED

    @pytest.mark.asyncio
    async def test_pool_timeout_on_write_is_connection_failure(self, sample_weather):
        cache = WeatherCacheRepository(_exhausted_pool)

        result = await cache.put("1.0,2.0", sample_weather, expires_at=_in(3))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CACHE_WRITE_FAILED
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
        )
