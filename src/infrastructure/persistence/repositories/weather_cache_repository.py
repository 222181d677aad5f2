"""WeatherCacheRepository - SQL implementation of WeatherCache protocol.

Same shape as the geolocation cache, keyed by "{longitude},{latitude}".
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.value_objects import WeatherSnapshot
from src.infrastructure.errors import DatabaseError
from src.infrastructure.persistence.dialects import insert_if_absent
from src.infrastructure.persistence.failures import database_error_code
from src.infrastructure.persistence.models.weather_cache import WeatherCacheEntry

type SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class WeatherCacheRepository:
    """Weather cache backed by the ``weather_cache`` table."""

    def __init__(self, session_factory: SessionFactory) -> None:
        """Initialize repository.

        Args:
            session_factory: Opens a transactional AsyncSession.
        """
        self._session_factory = session_factory

    async def get(
        self, coordinates: str
    ) -> Result[WeatherSnapshot | None, DatabaseError]:
        """Look up cached weather (expiry not checked).

        Args:
            coordinates: "{longitude},{latitude}" key.

        Returns:
            Success(WeatherSnapshot) on hit, Success(None) on miss, or DatabaseError.
        """
        try:
            async with self._session_factory() as session:
                entry = await session.scalar(
                    select(WeatherCacheEntry).where(
                        WeatherCacheEntry.coordinates == coordinates
                    )
                )
        except SQLAlchemyError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.CACHE_READ_FAILED,
                    infrastructure_code=database_error_code(e),
                    message=f"Failed to read weather cache for '{coordinates}'",
                    details={"coordinates": coordinates, "error": str(e)},
                )
            )

        if entry is None:
            return Success(value=None)

        return Success(
            value=WeatherSnapshot(
                type=entry.condition,
                temperature=entry.temperature,
                icon=entry.icon,
            )
        )

    async def put(
        self,
        coordinates: str,
        weather: WeatherSnapshot,
        *,
        expires_at: datetime,
    ) -> Result[None, DatabaseError]:
        """Insert an entry unless the coordinates are already cached.

        Args:
            coordinates: "{longitude},{latitude}" key.
            weather: Resolved weather.
            expires_at: Advisory expiry.

        Returns:
            Success(None), or DatabaseError.
        """
        try:
            async with self._session_factory() as session:
                stmt = insert_if_absent(
                    session,
                    WeatherCacheEntry,
                    {
                        "coordinates": coordinates,
                        "condition": weather.type,
                        "temperature": weather.temperature,
                        "icon": weather.icon,
                        "expires_at": expires_at,
                    },
                    conflict_columns=["coordinates"],
                )
                await session.execute(stmt)
        except SQLAlchemyError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.CACHE_WRITE_FAILED,
                    infrastructure_code=database_error_code(e),
                    message=f"Failed to write weather cache for '{coordinates}'",
                    details={"coordinates": coordinates, "error": str(e)},
                )
            )

        return Success(value=None)
