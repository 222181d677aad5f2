"""Geolocation snapshot value object.

Immutable view of where an IP address is located. Produced by the geolocation
resolution chain (from cache or from the external API) and stored on the
session as JSON.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class GeoSnapshot:
    """Geographic location resolved from an IP address.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        country: Country name ("Germany").
        country_code: ISO country code ("DE").
        region: Region/state name ("Bavaria").
        region_code: Region code ("BY").
        city: City name ("Munich").
    """

    latitude: float
    longitude: float
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    region_code: str | None = None
    city: str | None = None

    @property
    def coordinates_key(self) -> str:
        """Weather cache key for this location: "{longitude},{latitude}"."""
        return f"{self.longitude},{self.latitude}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict.

        Returns:
            Dict with every geolocation field.
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeoSnapshot":
        """Rebuild a snapshot from its dict form.

        Unknown keys (e.g. a stored expiry) are ignored.

        Args:
            data: Dict produced by to_dict() or read from storage.

        Returns:
            GeoSnapshot instance.
        """
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            country=data.get("country"),
            country_code=data.get("country_code"),
            region=data.get("region"),
            region_code=data.get("region_code"),
            city=data.get("city"),
        )
