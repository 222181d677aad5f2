"""Cache store protocols for resolved geolocation and weather data.

Entries are keyed by value (IP address, "{longitude},{latitude}"), not by
session, so sessions sharing an address or location share an entry.

Architecture:
- Protocol-based - uses structural typing
- All operations return Result types
- Fail-open strategy: cache failures must not stop enrichment
- Expiry is stored with every entry but NOT enforced on read
"""

from datetime import datetime
from typing import Protocol

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot


class GeoCache(Protocol):
    """Geolocation-by-IP cache port."""

    async def get(self, ip_address: str) -> Result[GeoSnapshot | None, DomainError]:
        """Look up a cached geolocation.

        Args:
            ip_address: Source address.

        Returns:
            Success(snapshot) on hit, Success(None) on miss, Failure on
            storage error. Stale entries are still returned.
        """
        ...

    async def put(
        self,
        ip_address: str,
        geo: GeoSnapshot,
        *,
        expires_at: datetime,
    ) -> Result[None, DomainError]:
        """Insert an entry unless one already exists for the address.

        Args:
            ip_address: Source address.
            geo: Resolved geolocation.
            expires_at: When the entry becomes stale.

        Returns:
            Success(None) on insert or existing entry, Failure on storage error.
        """
        ...


class WeatherCache(Protocol):
    """Weather-by-coordinates cache port."""

    async def get(
        self, coordinates: str
    ) -> Result[WeatherSnapshot | None, DomainError]:
        """Look up cached weather.

        Args:
            coordinates: "{longitude},{latitude}" key.

        Returns:
            Success(snapshot) on hit, Success(None) on miss, Failure on
            storage error. Stale entries are still returned.
        """
        ...

    async def put(
        self,
        coordinates: str,
        weather: WeatherSnapshot,
        *,
        expires_at: datetime,
    ) -> Result[None, DomainError]:
        """Insert an entry unless one already exists for the coordinates.

        Args:
            coordinates: "{longitude},{latitude}" key.
            weather: Resolved weather.
            expires_at: When the entry becomes stale.

        Returns:
            Success(None) on insert or existing entry, Failure on storage error.
        """
        ...
