"""Session database model.

Sessions are inserted by the API that records client connections. The
enrichment worker reads ip_address and writes geo/weather exactly once per
enrichment attempt.

Network Information:
    - ip_address: Stored as a plain string (portable across PostgreSQL/SQLite)

Enrichment:
    - geo: GeoSnapshot as JSON (null when unresolvable)
    - weather: {type, temperature, icon} as JSON (null when unresolvable)
    - enriched_at: Set by the worker on merge
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Session(BaseMutableModel):
    """Session model holding enrichment results.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when session created (from BaseMutableModel)
        updated_at: Timestamp when session last updated (from BaseMutableModel)
        ip_address: Client IP at session creation
        geo: Geolocation snapshot (JSON)
        weather: Weather snapshot (JSON)
        enriched_at: When the worker merged enrichment data

    Example:
        session = Session(id=session_id, ip_address="8.8.8.8")
        db_session.add(session)
        await db_session.commit()
    """

    __tablename__ = "sessions"

    ip_address: Mapped[str] = mapped_column(
        String(45),
        nullable=False,
        comment="Client IP address at session creation",
    )

    geo: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        default=None,
        comment="Geolocation resolved from ip_address",
    )

    weather: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        default=None,
        comment="Weather at the resolved coordinates",
    )

    enriched_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="When enrichment data was merged",
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Session info with ID and enrichment state.
        """
        return (
            f"<Session(id={self.id}, ip_address={self.ip_address}, "
            f"enriched={self.enriched_at is not None})>"
        )
