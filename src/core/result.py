"""Result types for railway-oriented programming.

External lookups in the enrichment pipeline fail routinely (timeouts, quota
errors, malformed bodies). Rather than raising, adapters return a Result and
the resolution chains decide what a failure means (usually "no data").

Usage:
    result = await geolocation_resolver.lookup("203.0.113.7")
    match result:
        case Success(value=geo):
            print(geo.city)
        case Failure(error=err):
            logger.warning("geolocation_lookup_failed", error=str(err))
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
