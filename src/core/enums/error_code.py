"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*)
- Enrichment source errors (GEOLOCATION_*, WEATHER_*)
- Cache errors (CACHE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_IP_ADDRESS = "invalid_ip_address"

    # Enrichment source errors
    GEOLOCATION_UNAVAILABLE = "geolocation_unavailable"
    GEOLOCATION_INVALID_RESPONSE = "geolocation_invalid_response"
    WEATHER_UNAVAILABLE = "weather_unavailable"
    WEATHER_INVALID_RESPONSE = "weather_invalid_response"

    # Cache errors
    CACHE_READ_FAILED = "cache_read_failed"
    CACHE_WRITE_FAILED = "cache_write_failed"
