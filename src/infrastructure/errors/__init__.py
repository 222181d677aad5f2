"""Infrastructure errors package.

Usage:
    from src.infrastructure.errors import CacheError, ExternalServiceError
"""

from src.infrastructure.errors.infrastructure_error import (
    CacheError,
    DatabaseError,
    ExternalServiceError,
    InfrastructureError,
)

__all__ = [
    "InfrastructureError",
    "DatabaseError",
    "CacheError",
    "ExternalServiceError",
]
