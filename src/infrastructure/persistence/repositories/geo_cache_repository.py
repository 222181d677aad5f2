"""GeoCacheRepository - SQL implementation of GeoCache protocol.

Each call runs in its own short-lived session so a failed cache statement
never poisons the transaction of the work item that triggered it.

Architecture:
- Implements GeoCache without inheritance (structural typing)
- Maps SQLAlchemyError to DatabaseError (connection failures get their own code)
- Returns Result types for all operations
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.value_objects import GeoSnapshot
from src.infrastructure.errors import DatabaseError
from src.infrastructure.persistence.dialects import insert_if_absent
from src.infrastructure.persistence.failures import database_error_code
from src.infrastructure.persistence.models.geo_cache import GeoCacheEntry

type SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class GeoCacheRepository:
    """Geolocation cache backed by the ``geo_cache`` table.

    Example:
        >>> cache = GeoCacheRepository(database.get_session)
        >>> match await cache.get("8.8.8.8"):
        ...     case Success(value=GeoSnapshot() as geo):
        ...         ...
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """Initialize repository.

        Args:
            session_factory: Opens a transactional AsyncSession.
        """
        self._session_factory = session_factory

    async def get(self, ip_address: str) -> Result[GeoSnapshot | None, DatabaseError]:
        """Look up a cached geolocation (expiry not checked).

        Args:
            ip_address: Source address.

        Returns:
            Success(GeoSnapshot) on hit, Success(None) on miss, or DatabaseError.
        """
        try:
            async with self._session_factory() as session:
                entry = await session.scalar(
                    select(GeoCacheEntry).where(GeoCacheEntry.ip_address == ip_address)
                )
        except SQLAlchemyError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.CACHE_READ_FAILED,
                    infrastructure_code=database_error_code(e),
                    message=f"Failed to read geo cache for '{ip_address}'",
                    details={"ip_address": ip_address, "error": str(e)},
                )
            )

        if entry is None:
            return Success(value=None)

        return Success(
            value=GeoSnapshot(
                latitude=entry.latitude,
                longitude=entry.longitude,
                country=entry.country,
                country_code=entry.country_code,
                region=entry.region,
                region_code=entry.region_code,
                city=entry.city,
            )
        )

    async def put(
        self,
        ip_address: str,
        geo: GeoSnapshot,
        *,
        expires_at: datetime,
    ) -> Result[None, DatabaseError]:
        """Insert an entry unless the address is already cached.

        Args:
            ip_address: Source address.
            geo: Resolved geolocation.
            expires_at: Advisory expiry.

        Returns:
            Success(None), or DatabaseError.
        """
        try:
            async with self._session_factory() as session:
                stmt = insert_if_absent(
                    session,
                    GeoCacheEntry,
                    {"ip_address": ip_address, "expires_at": expires_at, **geo.to_dict()},
                    conflict_columns=["ip_address"],
                )
                await session.execute(stmt)
        except SQLAlchemyError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.CACHE_WRITE_FAILED,
                    infrastructure_code=database_error_code(e),
                    message=f"Failed to write geo cache for '{ip_address}'",
                    details={"ip_address": ip_address, "error": str(e)},
                )
            )

        return Success(value=None)
