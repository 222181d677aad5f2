"""External resolver protocols (geolocation and weather lookups).

Each resolver is a single outbound call with a bounded timeout. Anything other
than a well-formed answer (transport error, timeout, non-200, malformed body)
is a Failure; callers never see exceptions.
"""

from typing import Protocol

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot


class GeolocationResolver(Protocol):
    """IP geolocation lookup port.

    Example:
        >>> result = await resolver.lookup("203.0.113.7")
        >>> match result:
        ...     case Success(value=geo):
        ...         print(geo.latitude, geo.longitude)
    """

    async def lookup(self, ip_address: str) -> Result[GeoSnapshot, DomainError]:
        """Resolve an IP address to a location.

        Args:
            ip_address: Client IP address (IPv4 or IPv6).

        Returns:
            Success(GeoSnapshot) when the response carries coordinates,
            Failure otherwise.
        """
        ...


class WeatherResolver(Protocol):
    """Current-weather lookup port."""

    async def current(
        self, latitude: float, longitude: float
    ) -> Result[WeatherSnapshot, DomainError]:
        """Fetch current weather for a coordinate pair.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.

        Returns:
            Success(WeatherSnapshot) for a well-formed response, Failure otherwise.
        """
        ...
