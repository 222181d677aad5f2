"""Database models for persistence layer.

SQLAlchemy models that map to database tables. These are infrastructure
concerns and should not be imported by the domain layer.

Models Organization:
    - session.py: Session record (enrichment target)
    - pending_enrichment.py: Work queue rows
    - geo_cache.py: Geolocation-by-IP cache
    - weather_cache.py: Weather-by-coordinates cache

Note:
    Domain entities (dataclasses) live in src/domain/
    Database models live here and are mapped via the repository layer.
    Importing this package registers every table on BaseModel.metadata.
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.models.geo_cache import GeoCacheEntry
from src.infrastructure.persistence.models.pending_enrichment import (
    PendingEnrichment,
)
from src.infrastructure.persistence.models.session import Session
from src.infrastructure.persistence.models.weather_cache import WeatherCacheEntry

__all__ = [
    "BaseModel",
    "GeoCacheEntry",
    "PendingEnrichment",
    "Session",
    "WeatherCacheEntry",
]
