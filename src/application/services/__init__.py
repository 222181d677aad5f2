"""Application services shared by enrichment handlers."""

from src.application.services.resolution_chain import (
    GeoResolutionChain,
    WeatherResolutionChain,
)
from src.application.services.run_guard import RunGuard

__all__ = ["GeoResolutionChain", "RunGuard", "WeatherResolutionChain"]
