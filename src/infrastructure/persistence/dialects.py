"""Dialect-specific statement helpers.

SQLAlchemy's generic insert() has no conflict clause; PostgreSQL and SQLite
each ship their own ``insert`` construct with ``on_conflict_do_nothing``.
"""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Insert

from src.infrastructure.persistence.base import BaseModel


def insert_if_absent(
    session: AsyncSession,
    model: type[BaseModel],
    values: dict[str, Any],
    *,
    conflict_columns: list[str],
) -> Insert:
    """Build an INSERT that silently does nothing when the key already exists.

    Args:
        session: Session whose bound engine decides the dialect.
        model: Mapped model to insert into.
        values: Column values.
        conflict_columns: Unique column(s) identifying an existing row.

    Returns:
        Executable insert statement.

    Raises:
        NotImplementedError: Dialect has no ON CONFLICT support wired here.
    """
    dialect = session.get_bind().dialect.name

    if dialect == "postgresql":
        return (
            postgresql.insert(model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=conflict_columns)
        )
    if dialect == "sqlite":
        return (
            sqlite.insert(model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=conflict_columns)
        )

    raise NotImplementedError(f"insert_if_absent not supported for {dialect}")
