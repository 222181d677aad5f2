"""Domain protocols (ports).

Interfaces the enrichment core depends on. Infrastructure adapters implement
them via structural typing (no inheritance).

Usage:
    from src.domain.protocols import GeoCache, GeolocationResolver, WorkQueue
"""

from src.domain.protocols.enrichment_cache_protocol import GeoCache, WeatherCache
from src.domain.protocols.enrichment_resolver_protocol import (
    GeolocationResolver,
    WeatherResolver,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.work_queue_protocol import WorkQueue

__all__ = [
    "GeoCache",
    "GeolocationResolver",
    "LoggerProtocol",
    "SessionRepository",
    "WeatherCache",
    "WeatherResolver",
    "WorkQueue",
]
