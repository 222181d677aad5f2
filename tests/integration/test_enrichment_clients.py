"""Integration tests for the geolocation and weather HTTP clients.

HTTP is intercepted with pytest-httpx; no network access.

Tests cover:
- Successful lookups and the request each client sends
- Provider field fallbacks (country/country_name, region/region_name)
- Non-public addresses rejected without a request
- Timeouts, connection errors, 5xx and 4xx mapped to ExternalServiceError
- Malformed bodies mapped to the invalid-response code
"""

import httpx
import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot
from src.infrastructure.enrichers import IPGeolocationClient, OpenWeatherClient
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import ExternalServiceError

GEO_URL = "https://geo.test/json"
WEATHER_URL = "https://weather.test/data/2.5/weather"

FREEGEOIP_BODY = {
    "ip": "8.8.8.8",
    "country_code": "US",
    "country_name": "United States",
    "region_code": "CA",
    "region_name": "California",
    "city": "Mountain View",
    "zip_code": "94035",
    "latitude": 37.386,
    "longitude": -122.0838,
}

OPENWEATHER_BODY = {
    "coord": {"lon": -122.0838, "lat": 37.386},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "main": {"temp": 20.0, "humidity": 40},
    "name": "Mountain View",
}


@pytest.fixture
def geo_client() -> IPGeolocationClient:
    return IPGeolocationClient(base_url=GEO_URL, api_key="geo-key", timeout=2.0)


@pytest.fixture
def weather_client() -> OpenWeatherClient:
    return OpenWeatherClient(
        base_url=WEATHER_URL, api_key="weather-key", units="metric", timeout=2.0
    )


@pytest.mark.integration
class TestIPGeolocationClient:
    @pytest.mark.asyncio
    async def test_lookup_success(self, geo_client, httpx_mock, sample_geo):
        httpx_mock.add_response(json=FREEGEOIP_BODY)

        result = await geo_client.lookup("8.8.8.8")

        assert result == Success(value=sample_geo)
        request = httpx_mock.get_request()
        assert request.method == "GET"
        assert request.url.path == "/json/8.8.8.8"
        assert request.url.params["apikey"] == "geo-key"

    @pytest.mark.asyncio
    async def test_alternate_field_names(self, geo_client, httpx_mock):
        httpx_mock.add_response(
            json={
                "country": "Germany",
                "region": "Bavaria",
                "city": "",
                "latitude": "48.1374",
                "longitude": "11.5755",
            }
        )

        result = await geo_client.lookup("2a00:1450:4001:80b::200e")

        assert result == Success(
            value=GeoSnapshot(
                latitude=48.1374,
                longitude=11.5755,
                country="Germany",
                region="Bavaria",
            )
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ip_address", ["10.0.0.1", "127.0.0.1", "::1", "not-an-ip"])
    async def test_non_public_address_skips_request(
        self, geo_client, httpx_mock, ip_address
    ):
        result = await geo_client.lookup(ip_address)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_IP_ADDRESS
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_missing_coordinates(self, geo_client, httpx_mock):
        httpx_mock.add_response(json={"country_name": "Nowhere", "latitude": 1.0})

        result = await geo_client.lookup("8.8.8.8")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.GEOLOCATION_INVALID_RESPONSE
        assert result.error.details == {"missing": "longitude"}

    @pytest.mark.asyncio
    async def test_timeout(self, geo_client, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        result = await geo_client.lookup("8.8.8.8")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ExternalServiceError)
        assert result.error.code == ErrorCode.GEOLOCATION_UNAVAILABLE
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.EXTERNAL_SERVICE_TIMEOUT
        )
        assert result.error.service_name == "geolocation"

    @pytest.mark.asyncio
    async def test_connection_error(self, geo_client, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        result = await geo_client.lookup("8.8.8.8")

        assert isinstance(result, Failure)
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.EXTERNAL_SERVICE_UNAVAILABLE
        )

    @pytest.mark.asyncio
    async def test_server_error(self, geo_client, httpx_mock):
        httpx_mock.add_response(status_code=503)

        result = await geo_client.lookup("8.8.8.8")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.GEOLOCATION_UNAVAILABLE
        assert result.error.details == {"status_code": 503}

    @pytest.mark.asyncio
    async def test_client_error(self, geo_client, httpx_mock):
        httpx_mock.add_response(status_code=403, text="invalid api key")

        result = await geo_client.lookup("8.8.8.8")

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.EXTERNAL_SERVICE_ERROR
        assert result.error.details["response_body"] == "invalid api key"

    @pytest.mark.asyncio
    async def test_invalid_json(self, geo_client, httpx_mock):
        httpx_mock.add_response(text="<html>oops</html>")

        result = await geo_client.lookup("8.8.8.8")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.GEOLOCATION_INVALID_RESPONSE


@pytest.mark.integration
class TestOpenWeatherClient:
    @pytest.mark.asyncio
    async def test_current_success(self, weather_client, httpx_mock, sample_weather):
        httpx_mock.add_response(json=OPENWEATHER_BODY)

        result = await weather_client.current(37.386, -122.0838)

        assert result == Success(value=sample_weather)
        params = httpx_mock.get_request().url.params
        assert params["lat"] == "37.386"
        assert params["lon"] == "-122.0838"
        assert params["units"] == "metric"
        assert params["appid"] == "weather-key"

    @pytest.mark.asyncio
    async def test_no_api_key_omits_appid(self, httpx_mock):
        client = OpenWeatherClient(base_url=WEATHER_URL, timeout=2.0)
        httpx_mock.add_response(json=OPENWEATHER_BODY)

        await client.current(1.0, 2.0)

        assert "appid" not in httpx_mock.get_request().url.params

    @pytest.mark.asyncio
    async def test_integer_temperature(self, weather_client, httpx_mock):
        httpx_mock.add_response(
            json={"weather": [{"main": "Snow", "icon": "13n"}], "main": {"temp": -3}}
        )

        result = await weather_client.current(60.0, 10.0)

        assert result == Success(
            value=WeatherSnapshot(type="Snow", temperature=-3.0, icon="13n")
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"main": {"temp": 20}},
            {"weather": [], "main": {"temp": 20}},
            {"weather": [{"main": "Clear"}], "main": {"temp": 20}},
            {"weather": [{"main": "Clear", "icon": "01d"}]},
            {"weather": [{"main": "Clear", "icon": "01d"}], "main": {"temp": "warm"}},
        ],
    )
    async def test_contract_mismatch(self, weather_client, httpx_mock, body):
        httpx_mock.add_response(json=body)

        result = await weather_client.current(37.386, -122.0838)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.WEATHER_INVALID_RESPONSE
        assert result.error.service_name == "weather"

    @pytest.mark.asyncio
    async def test_server_error(self, weather_client, httpx_mock):
        httpx_mock.add_response(status_code=502)

        result = await weather_client.current(37.386, -122.0838)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.WEATHER_UNAVAILABLE
