"""LoggerProtocol definition for structured logging.

Keeps the application layer backend-agnostic: handlers log through this port
and the container decides which adapter (structlog console/JSON) backs it.

Log Levels:
    - DEBUG: Cache hits, skipped ticks
    - INFO: Batch start/finish, enrichment merged
    - WARNING: External lookup failed, cache unavailable (degraded but running)
    - ERROR: A work item crashed; the batch continues

Security:
    - NEVER log API keys or full upstream URLs with credentials

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    batch_logger = logger.bind(batch_id=str(batch_id))
    batch_logger.info("enrichment_batch_started", dequeued=len(items))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls are structured: an event name plus key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
