"""Redis adapter for JSON cache entries.

Wraps the async Redis client and maps Redis exceptions to CacheError so the
enrichment caches built on top of it only ever deal in Result types.

Architecture:
- Maps Redis exceptions to CacheError with proper ErrorCode
- Returns Result types for all operations
- Fail-open strategy: callers treat failures as cache misses
"""

import json
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


def _redis_error_code(
    error: RedisError, default: InfrastructureErrorCode
) -> InfrastructureErrorCode:
    if isinstance(error, RedisTimeoutError):
        return InfrastructureErrorCode.CACHE_TIMEOUT
    if isinstance(error, RedisConnectionError):
        return InfrastructureErrorCode.CACHE_CONNECTION_ERROR
    return default


class RedisAdapter:
    """Thin Result-returning wrapper around an async Redis client.

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis) -> None:
        """Initialize Redis adapter.

        Args:
            redis_client: Async Redis client instance.
        """
        self._redis = redis_client

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, CacheError]:
        """Get and decode a JSON object.

        Args:
            key: Cache key.

        Returns:
            Result with parsed dict if found, None if not found, or CacheError.
        """
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_READ_FAILED,
                    infrastructure_code=_redis_error_code(
                        e, InfrastructureErrorCode.CACHE_GET_ERROR
                    ),
                    message=f"Failed to get key '{key}' from cache",
                    details={"key": key, "error": str(e)},
                )
            )

        if raw is None:
            return Success(value=None)

        try:
            decoded = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            parsed = json.loads(decoded)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_READ_FAILED,
                    infrastructure_code=InfrastructureErrorCode.CACHE_DECODE_ERROR,
                    message=f"Failed to parse JSON for key '{key}'",
                    details={"key": key, "error": str(e)},
                )
            )

        if not isinstance(parsed, dict):
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_READ_FAILED,
                    infrastructure_code=InfrastructureErrorCode.CACHE_DECODE_ERROR,
                    message=f"Cached value for key '{key}' is not an object",
                    details={"key": key},
                )
            )

        return Success(value=parsed)

    async def set_json_if_absent(
        self,
        key: str,
        value: dict[str, Any],
    ) -> Result[bool, CacheError]:
        """Store a JSON object only if the key does not exist (SET NX).

        The key is written without a TTL, Redis never evicts it on its own.

        Args:
            key: Cache key.
            value: Dict to cache (JSON serialized).

        Returns:
            Result with True if written, False if the key already existed,
            or CacheError.
        """
        try:
            written = await self._redis.set(key, json.dumps(value), nx=True)
        except RedisError as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.CACHE_WRITE_FAILED,
                    infrastructure_code=_redis_error_code(
                        e, InfrastructureErrorCode.CACHE_SET_ERROR
                    ),
                    message=f"Failed to set key '{key}' in cache",
                    details={"key": key, "error": str(e)},
                )
            )

        return Success(value=bool(written))

    async def close(self) -> None:
        """Close the client and release pooled connections."""
        await self._redis.aclose()
