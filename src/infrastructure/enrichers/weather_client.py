"""Current weather client (OpenWeatherMap-compatible API).

Request:
    GET {WEATHER_API_URL}?lat=..&lon=..&units=..[&appid=...]

A usable response is an object with a non-empty ``weather`` list whose first
entry carries ``main`` and ``icon``, plus a numeric ``main.temp``:

    {"weather": [{"main": "Clear", "icon": "01d"}], "main": {"temp": 20}}
"""

from typing import Any

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.value_objects import WeatherSnapshot
from src.infrastructure.enrichers.base_api_client import (
    BaseEnrichmentAPIClient,
    as_float,
)
from src.infrastructure.errors import ExternalServiceError


class OpenWeatherClient(BaseEnrichmentAPIClient):
    """Weather lookup over HTTP.

    Implements WeatherResolver protocol (structural typing).
    """

    unavailable_code = ErrorCode.WEATHER_UNAVAILABLE
    invalid_response_code = ErrorCode.WEATHER_INVALID_RESPONSE

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None = None,
        units: str = "metric",
        timeout: float,
    ) -> None:
        """Initialize weather client.

        Args:
            base_url: Current-weather endpoint.
            api_key: Optional API key sent as ``appid``.
            units: Temperature units (metric, imperial, standard).
            timeout: HTTP request timeout in seconds.
        """
        super().__init__(base_url=base_url, service_name="weather", timeout=timeout)
        self._api_key = api_key
        self._units = units

    async def current(
        self, latitude: float, longitude: float
    ) -> Result[WeatherSnapshot, ExternalServiceError]:
        """Fetch current weather for a coordinate pair.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.

        Returns:
            Success(WeatherSnapshot), or Failure(ExternalServiceError) on any
            transport error or contract mismatch.
        """
        params = {
            "lat": str(latitude),
            "lon": str(longitude),
            "units": self._units,
        }
        if self._api_key:
            params["appid"] = self._api_key

        result = await self._execute_and_parse_object(
            path="",
            params=params,
            operation="current_weather",
        )
        if isinstance(result, Failure):
            return result

        return self._to_snapshot(result.value)

    def _to_snapshot(
        self, data: dict[str, Any]
    ) -> Result[WeatherSnapshot, ExternalServiceError]:
        conditions = data.get("weather")
        if not isinstance(conditions, list) or not conditions:
            return self._invalid_response("Weather response has no conditions")

        condition = conditions[0]
        if not isinstance(condition, dict):
            return self._invalid_response("Weather condition is not an object")

        condition_type = condition.get("main")
        icon = condition.get("icon")
        if not condition_type or not icon:
            return self._invalid_response(
                "Weather condition lacks main or icon",
                condition=str(condition)[:200],
            )

        readings = data.get("main")
        temperature = (
            as_float(readings.get("temp")) if isinstance(readings, dict) else None
        )
        if temperature is None:
            return self._invalid_response("Weather response has no numeric main.temp")

        return Success(
            value=WeatherSnapshot(
                type=str(condition_type),
                temperature=temperature,
                icon=str(icon),
            )
        )
