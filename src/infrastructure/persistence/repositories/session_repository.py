"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between domain EnrichableSession entities and database Session models.
"""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import EnrichableSession
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot
from src.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from SessionRepository protocol
    (Protocol uses structural typing - duck typing with type safety).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     session = await repo.find_by_id(session_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def save(self, session: EnrichableSession) -> None:
        """Save or update a session.

        Args:
            session: Session entity to persist.
        """
        existing = await self._session.get(SessionModel, session.id)

        if existing is None:
            self._session.add(self._to_model(session))
        else:
            existing.ip_address = session.ip_address
            existing.geo = session.geo.to_dict() if session.geo else None
            existing.weather = session.weather.to_dict() if session.weather else None
            existing.enriched_at = session.enriched_at

        await self._session.commit()

    async def find_by_id(self, session_id: UUID) -> EnrichableSession | None:
        """Find session by ID.

        Args:
            session_id: Session identifier.

        Returns:
            EnrichableSession if found, None otherwise.
        """
        session_model = await self._session.get(SessionModel, session_id)

        if session_model is None:
            return None

        return self._to_entity(session_model)

    async def apply_enrichment(
        self,
        session_id: UUID,
        *,
        geo: GeoSnapshot | None,
        weather: WeatherSnapshot | None,
    ) -> bool:
        """Overwrite geo and weather in a single UPDATE.

        Args:
            session_id: Session identifier.
            geo: Geolocation result or None (stored as NULL).
            weather: Weather result or None (stored as NULL).

        Returns:
            True if a row was updated, False if the session no longer exists.
        """
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id)
            .values(
                geo=geo.to_dict() if geo else None,
                weather=weather.to_dict() if weather else None,
                enriched_at=datetime.now(UTC),
            )
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return (cast(Any, result).rowcount or 0) > 0

    def _to_entity(self, model: SessionModel) -> EnrichableSession:
        """Convert database model to domain entity.

        Args:
            model: SQLAlchemy Session model.

        Returns:
            EnrichableSession entity.
        """
        return EnrichableSession(
            id=model.id,
            ip_address=model.ip_address,
            geo=GeoSnapshot.from_dict(model.geo) if model.geo else None,
            weather=WeatherSnapshot.from_dict(model.weather) if model.weather else None,
            created_at=model.created_at,
            enriched_at=model.enriched_at,
        )

    def _to_model(self, session: EnrichableSession) -> SessionModel:
        """Convert domain entity to database model.

        Args:
            session: EnrichableSession entity.

        Returns:
            SQLAlchemy Session model.
        """
        return SessionModel(
            id=session.id,
            ip_address=session.ip_address,
            geo=session.geo.to_dict() if session.geo else None,
            weather=session.weather.to_dict() if session.weather else None,
            enriched_at=session.enriched_at,
        )
