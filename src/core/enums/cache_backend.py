"""Cache store backends for geolocation and weather entries."""

from enum import Enum


class CacheBackend(str, Enum):
    """Where resolved geolocation/weather entries are cached.

    - DATABASE: geo_cache / weather_cache tables next to the sessions table
    - REDIS: JSON entries without key TTL, expiry stored in the value
    """

    DATABASE = "database"
    REDIS = "redis"
