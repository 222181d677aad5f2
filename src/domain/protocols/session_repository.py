"""Session repository protocol for persistence abstraction.

This module defines the port (interface) for session persistence.
Infrastructure layer implements the adapter.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities import EnrichableSession
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot


class SessionRepository(Protocol):
    """Session repository protocol (port) for persistence.

    Sessions are created elsewhere; the worker looks them up and merges
    enrichment results into them.
    """

    async def save(self, session: EnrichableSession) -> None:
        """Save or update a session.

        Args:
            session: Session to persist.
        """
        ...

    async def find_by_id(self, session_id: UUID) -> EnrichableSession | None:
        """Find session by ID.

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def apply_enrichment(
        self,
        session_id: UUID,
        *,
        geo: GeoSnapshot | None,
        weather: WeatherSnapshot | None,
    ) -> bool:
        """Overwrite the session's geo and weather fields.

        Both fields are written even when None (null-equivalent, not an error).

        Args:
            session_id: Session identifier.
            geo: Geolocation result or None.
            weather: Weather result or None.

        Returns:
            True if the session was updated, False if it no longer exists
            (nothing is written in that case).
        """
        ...
