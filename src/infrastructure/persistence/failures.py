"""Classify SQLAlchemy failures into infrastructure error codes."""

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from src.infrastructure.enums import InfrastructureErrorCode


def database_error_code(error: SQLAlchemyError) -> InfrastructureErrorCode:
    """Pick the infrastructure code for a failed statement.

    Pool checkout timeouts and invalidated connections mean no usable
    connection was available; everything else is a statement failure.

    Args:
        error: Exception raised by SQLAlchemy.

    Returns:
        DATABASE_CONNECTION_FAILED or DATABASE_ERROR.
    """
    if isinstance(error, PoolTimeoutError):
        return InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
    return InfrastructureErrorCode.DATABASE_ERROR
