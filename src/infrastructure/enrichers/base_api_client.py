"""Base API client for enrichment lookups over HTTP.

This module provides a base class for the geolocation and weather clients that
handles:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation
- JSON object parsing with error handling
- Structured logging with service context

Subclasses build the request (path, query parameters) and turn the parsed
object into a snapshot.

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for expected failures)
"""

from typing import Any

import httpx
import structlog

from src.core.constants import ENRICHMENT_HTTP_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import ExternalServiceError


class BaseEnrichmentAPIClient:
    """Base class for enrichment API clients with shared HTTP handling.

    Attributes:
        _base_url: API base URL (without trailing slash).
        _service_name: Service identifier for logging and error messages.
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger with service context.

    Subclasses set:
        unavailable_code: ErrorCode for transport/status failures.
        invalid_response_code: ErrorCode for malformed bodies.

    Example:
        >>> class WeatherAPI(BaseEnrichmentAPIClient):
        ...     unavailable_code = ErrorCode.WEATHER_UNAVAILABLE
        ...     invalid_response_code = ErrorCode.WEATHER_INVALID_RESPONSE
        ...
        ...     async def current(self, lat, lon):
        ...         return await self._execute_and_parse_object(
        ...             path="",
        ...             params={"lat": str(lat), "lon": str(lon)},
        ...             operation="current_weather",
        ...         )
    """

    unavailable_code: ErrorCode = ErrorCode.GEOLOCATION_UNAVAILABLE
    invalid_response_code: ErrorCode = ErrorCode.GEOLOCATION_INVALID_RESPONSE

    def __init__(
        self,
        *,
        base_url: str,
        service_name: str,
        timeout: float = ENRICHMENT_HTTP_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize base enrichment API client.

        Args:
            base_url: API base URL (e.g., "https://freegeoip.app/json").
            service_name: Service identifier (e.g., "geolocation", "weather").
            timeout: HTTP request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._service_name = service_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{service_name}_api")

    def _unavailable(
        self,
        message: str,
        infrastructure_code: InfrastructureErrorCode,
        **details: Any,
    ) -> Failure[ExternalServiceError]:
        return Failure(
            error=ExternalServiceError(
                code=self.unavailable_code,
                infrastructure_code=infrastructure_code,
                message=message,
                service_name=self._service_name,
                details=details or None,
            )
        )

    def _invalid_response(self, message: str, **details: Any) -> Failure[ExternalServiceError]:
        """Build a Failure for a response that does not match the contract.

        Args:
            message: Human-readable reason.
            **details: Extra context (truncated body, missing field).

        Returns:
            Failure(ExternalServiceError) with the invalid-response code.
        """
        return Failure(
            error=ExternalServiceError(
                code=self.invalid_response_code,
                infrastructure_code=InfrastructureErrorCode.EXTERNAL_SERVICE_INVALID_RESPONSE,
                message=message,
                service_name=self._service_name,
                details=details or None,
            )
        )

    async def _execute_request(
        self,
        *,
        path: str,
        params: dict[str, str] | None = None,
        operation: str,
    ) -> Result[httpx.Response, ExternalServiceError]:
        """Execute a GET request with error handling.

        Args:
            path: URL path relative to base_url ("" for the base URL itself).
            params: Optional query parameters.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(ExternalServiceError): On timeout or connection error.
        """
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params)
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._service_name}_api_timeout",
                operation=operation,
                error=str(e),
            )
            return self._unavailable(
                f"{self._service_name.title()} API request timed out",
                InfrastructureErrorCode.EXTERNAL_SERVICE_TIMEOUT,
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._service_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return self._unavailable(
                f"Failed to connect to {self._service_name.title()} API: {e}",
                InfrastructureErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ExternalServiceError] | None:
        """Check HTTP response status.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.

        Returns:
            Failure(ExternalServiceError) if not 200, None if response is OK.
        """
        status = response.status_code

        if status == 200:
            return None

        if status >= 500:
            self._logger.warning(
                f"{self._service_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return self._unavailable(
                f"{self._service_name.title()} API server error: {status}",
                InfrastructureErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
                status_code=status,
            )

        # 4xx: bad key, rate limit, unknown address
        self._logger.warning(
            f"{self._service_name}_api_unexpected_status",
            operation=operation,
            status_code=status,
        )
        return self._unavailable(
            f"Unexpected response from {self._service_name.title()}: {status}",
            InfrastructureErrorCode.EXTERNAL_SERVICE_ERROR,
            status_code=status,
            response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], ExternalServiceError]:
        """Parse response as JSON object with error handling.

        Args:
            response: HTTP response to parse.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ExternalServiceError): On HTTP error, invalid JSON or a
            non-object body.
        """
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        try:
            data = response.json()
        except ValueError as e:
            self._logger.warning(
                f"{self._service_name}_api_invalid_json",
                operation=operation,
                error=str(e),
            )
            return self._invalid_response(
                f"Invalid JSON response from {self._service_name.title()}",
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )

        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._service_name}_api_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return self._invalid_response(
                f"Expected object response from {self._service_name.title()}",
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )

        self._logger.debug(
            f"{self._service_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    async def _execute_and_parse_object(
        self,
        *,
        path: str,
        params: dict[str, str] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], ExternalServiceError]:
        """Execute request and parse response as JSON object.

        Args:
            path: URL path relative to base_url.
            params: Optional query parameters.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ExternalServiceError): On any error.
        """
        result = await self._execute_request(
            path=path,
            params=params,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)


def as_float(value: Any) -> float | None:
    """Coerce a JSON number (or numeric string) to float.

    Args:
        value: Raw JSON value.

    Returns:
        Float value, or None for null, booleans and non-numeric values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
