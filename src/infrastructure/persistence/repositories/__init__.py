"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer.
"""

from src.infrastructure.persistence.repositories.geo_cache_repository import (
    GeoCacheRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from src.infrastructure.persistence.repositories.weather_cache_repository import (
    WeatherCacheRepository,
)
from src.infrastructure.persistence.repositories.work_queue_repository import (
    WorkQueueRepository,
)

__all__ = [
    "GeoCacheRepository",
    "SessionRepository",
    "WeatherCacheRepository",
    "WorkQueueRepository",
]
