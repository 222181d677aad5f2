"""Cache key construction utilities.

All enrichment keys follow the pattern {prefix}:{source}:{key}.

Usage:
    keys = CacheKeys(prefix="enrichment")
    keys.geo("8.8.8.8")            # "enrichment:geo:8.8.8.8"
    keys.weather("-122.08,37.38")  # "enrichment:weather:-122.08,37.38"
"""

from dataclasses import dataclass


@dataclass
class CacheKeys:
    """Centralized cache key construction.

    Attributes:
        prefix: Cache key prefix (typically "enrichment").
    """

    prefix: str

    def geo(self, ip_address: str) -> str:
        """Geolocation cache key.

        Pattern: {prefix}:geo:{ip_address}
        """
        return f"{self.prefix}:geo:{ip_address}"

    def weather(self, coordinates: str) -> str:
        """Weather cache key.

        Pattern: {prefix}:weather:{longitude},{latitude}
        """
        return f"{self.prefix}:weather:{coordinates}"
