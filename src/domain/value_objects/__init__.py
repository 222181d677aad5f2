"""Domain value objects.

Immutable snapshots attached to sessions by the enrichment pipeline.
"""

from src.domain.value_objects.geo_snapshot import GeoSnapshot
from src.domain.value_objects.weather_snapshot import WeatherSnapshot

__all__ = ["GeoSnapshot", "WeatherSnapshot"]
