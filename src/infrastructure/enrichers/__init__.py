"""External enrichment resolvers (HTTP clients).

- IPGeolocationClient: GeolocationResolver over a freegeoip-style API
- OpenWeatherClient: WeatherResolver over an OpenWeatherMap-style API
"""

from src.infrastructure.enrichers.geolocation_client import IPGeolocationClient
from src.infrastructure.enrichers.weather_client import OpenWeatherClient

__all__ = ["IPGeolocationClient", "OpenWeatherClient"]
