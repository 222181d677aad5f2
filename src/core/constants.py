"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Categories:
- Cache lifetimes: Default freshness windows for resolved data
- Timeouts: Default timeouts for external lookups
- Cache keys: Key prefixes for the Redis cache backend
- Limits: Truncation and safety limits

Example:
    >>> from src.core.constants import GEO_CACHE_TTL_SECONDS
    >>> expires_at = now + timedelta(seconds=GEO_CACHE_TTL_SECONDS)
"""

# =============================================================================
# Cache Lifetimes
# =============================================================================

GEO_CACHE_TTL_SECONDS: int = 24 * 60 * 60
"""Geolocation cache freshness window (1 day)."""

WEATHER_CACHE_TTL_SECONDS: int = 3 * 60 * 60
"""Weather cache freshness window (3 hours)."""


# =============================================================================
# Timeouts
# =============================================================================

ENRICHMENT_HTTP_TIMEOUT_DEFAULT: float = 10.0
"""Default timeout for geolocation/weather API calls in seconds."""

ENRICHMENT_INTERVAL_DEFAULT: float = 5.0
"""Default delay between scheduler ticks in seconds."""

ENRICHMENT_MAX_CONCURRENCY_DEFAULT: int = 10
"""Default number of work items processed at the same time within one batch."""

DB_POOL_SIZE_DEFAULT: int = 20
"""Default PostgreSQL connection pool size."""


# =============================================================================
# Cache Keys
# =============================================================================

CACHE_KEY_PREFIX: str = "enrichment"
"""Namespace for every Redis key written by the worker."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum characters of an upstream body kept in error details."""
