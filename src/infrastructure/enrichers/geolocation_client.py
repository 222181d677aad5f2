"""IP geolocation client (freegeoip / ipstack style JSON API).

Request:
    GET {GEOLOCATION_API_URL}/{ip_address}[?apikey=...]

Accepted response fields:
    latitude, longitude      required, numeric
    country_name | country   optional
    country_code             optional
    region_name | region     optional
    region_code              optional
    city                     optional

Private, loopback, reserved, link-local, multicast and malformed addresses
have no meaningful location and fail without an HTTP call.
"""

import ipaddress
from typing import Any

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.value_objects import GeoSnapshot
from src.infrastructure.enrichers.base_api_client import (
    BaseEnrichmentAPIClient,
    as_float,
)
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import ExternalServiceError


class IPGeolocationClient(BaseEnrichmentAPIClient):
    """Geolocation lookup over HTTP.

    Implements GeolocationResolver protocol (structural typing).
    """

    unavailable_code = ErrorCode.GEOLOCATION_UNAVAILABLE
    invalid_response_code = ErrorCode.GEOLOCATION_INVALID_RESPONSE

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None = None,
        timeout: float,
    ) -> None:
        """Initialize geolocation client.

        Args:
            base_url: Lookup endpoint; the address is appended as a path segment.
            api_key: Optional API key sent as ``apikey``.
            timeout: HTTP request timeout in seconds.
        """
        super().__init__(base_url=base_url, service_name="geolocation", timeout=timeout)
        self._api_key = api_key

    async def lookup(self, ip_address: str) -> Result[GeoSnapshot, ExternalServiceError]:
        """Resolve an IP address to a location.

        Args:
            ip_address: Client IP address (IPv4 or IPv6).

        Returns:
            Success(GeoSnapshot) when the response carries coordinates,
            Failure(ExternalServiceError) otherwise.
        """
        if not self._is_public_ip(ip_address):
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.INVALID_IP_ADDRESS,
                    infrastructure_code=InfrastructureErrorCode.EXTERNAL_SERVICE_ERROR,
                    message=f"No geolocation for non-public address '{ip_address}'",
                    service_name=self._service_name,
                )
            )

        params = {"apikey": self._api_key} if self._api_key else None
        result = await self._execute_and_parse_object(
            path=f"/{ip_address}",
            params=params,
            operation="lookup",
        )
        if isinstance(result, Failure):
            return result

        return self._to_snapshot(result.value)

    def _to_snapshot(
        self, data: dict[str, Any]
    ) -> Result[GeoSnapshot, ExternalServiceError]:
        latitude = as_float(data.get("latitude"))
        longitude = as_float(data.get("longitude"))
        if latitude is None or longitude is None:
            return self._invalid_response(
                "Geolocation response has no coordinates",
                missing="latitude" if latitude is None else "longitude",
            )

        return Success(
            value=GeoSnapshot(
                latitude=latitude,
                longitude=longitude,
                country=_text(data.get("country_name") or data.get("country")),
                country_code=_text(data.get("country_code")),
                region=_text(data.get("region_name") or data.get("region")),
                region_code=_text(data.get("region_code")),
                city=_text(data.get("city")),
            )
        )

    def _is_public_ip(self, ip_address: str) -> bool:
        """Check if IP address is globally routable.

        Args:
            ip_address: IP address string.

        Returns:
            False for private/reserved/malformed addresses, True otherwise.
        """
        try:
            ip = ipaddress.ip_address(ip_address)
        except ValueError:
            return False
        return not (
            ip.is_private
            or ip.is_loopback
            or ip.is_reserved
            or ip.is_link_local
            or ip.is_multicast
            or ip.is_unspecified
        )


def _text(value: Any) -> str | None:
    # Providers send "" for unknown fields
    if value is None or value == "":
        return None
    return str(value)
