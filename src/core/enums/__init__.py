"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from src.core.enums import CacheBackend, ErrorCode, Environment
"""

from src.core.enums.cache_backend import CacheBackend
from src.core.enums.environment import Environment
from src.core.enums.error_code import ErrorCode

__all__ = ["CacheBackend", "ErrorCode", "Environment"]
