"""Enrich session handler.

Flow:
1. Skip items this worker did not actually dequeue
2. Load the session (deleted session -> silent no-op)
3. Resolve geolocation for the session's source address
4. Resolve weather for the resolved coordinates (only if step 3 produced data)
5. Merge both results into the session

Architecture:
- Application layer ONLY imports from domain layer and application services
- Storage and lookups are injected via protocols
- Geo and weather failures degrade to None; they never fail the item
- The lookup and the merge each run in their own short storage scope, so no
  pooled connection is held while the chains wait on HTTP or cache I/O
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from uuid import UUID

from src.application.commands.enrichment_commands import EnrichSession
from src.application.services.resolution_chain import (
    GeoResolutionChain,
    WeatherResolutionChain,
)
from src.core.result import Failure, Result, Success
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository
from src.domain.value_objects import GeoSnapshot, WeatherSnapshot

type SessionRepositoryProvider = Callable[
    [], AbstractAsyncContextManager[SessionRepository]
]


class EnrichSessionError:
    """Reasons an item produced no write.

    Neither is an operational error: the batch counts them and moves on.
    """

    WORK_ITEM_NOT_PRESENT = "work_item_not_present"
    SESSION_NOT_FOUND = "session_not_found"


@dataclass
class EnrichSessionResponse:
    """Response data for a merged enrichment."""

    session_id: UUID
    geo: GeoSnapshot | None
    weather: WeatherSnapshot | None


class EnrichSessionHandler:
    """Handler for the per-item enrichment command.

    Orchestrates:
    - Geolocation resolution (cache-aside)
    - Weather resolution (cache-aside, depends on geolocation)
    - Idempotent overwrite of the session's geo/weather fields
    """

    def __init__(
        self,
        session_repo_provider: SessionRepositoryProvider,
        geo_chain: GeoResolutionChain,
        weather_chain: WeatherResolutionChain,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize enrich session handler with dependencies.

        Args:
            session_repo_provider: Opens a session repository bound to a short
                storage scope (one for the lookup, one for the merge).
            geo_chain: Geolocation resolution chain.
            weather_chain: Weather resolution chain.
            logger: Structured logger.
        """
        self._session_repo_provider = session_repo_provider
        self._geo_chain = geo_chain
        self._weather_chain = weather_chain
        self._logger = logger

    async def handle(self, cmd: EnrichSession) -> Result[EnrichSessionResponse, str]:
        """Handle enrich session command.

        Args:
            cmd: EnrichSession command with session_id and was_present.

        Returns:
            Success(EnrichSessionResponse) when the session was updated.
            Failure(EnrichSessionError.*) when nothing was written.

        Side Effects:
            - May call the geolocation and weather APIs.
            - May insert cache entries.
            - Updates the session's geo and weather fields.
        """
        log = self._logger.bind(session_id=str(cmd.session_id))

        # Step 1: Another worker drained this item first
        if not cmd.was_present:
            log.debug("enrichment_item_skipped")
            return Failure(error=EnrichSessionError.WORK_ITEM_NOT_PRESENT)

        # Step 2: Load session
        async with self._session_repo_provider() as session_repo:
            session = await session_repo.find_by_id(cmd.session_id)
        if session is None:
            log.debug("enrichment_session_missing")
            return Failure(error=EnrichSessionError.SESSION_NOT_FOUND)

        # Step 3: Geolocation
        geo = await self._geo_chain.resolve(session.ip_address)

        # Step 4: Weather (needs coordinates)
        weather = None
        if geo is not None:
            weather = await self._weather_chain.resolve(geo)

        # Step 5: Merge
        async with self._session_repo_provider() as session_repo:
            updated = await session_repo.apply_enrichment(
                cmd.session_id,
                geo=geo,
                weather=weather,
            )
        if not updated:
            # Deleted between lookup and merge
            log.debug("enrichment_session_missing")
            return Failure(error=EnrichSessionError.SESSION_NOT_FOUND)

        log.info(
            "session_enriched",
            has_geo=geo is not None,
            has_weather=weather is not None,
        )
        return Success(
            value=EnrichSessionResponse(
                session_id=cmd.session_id,
                geo=geo,
                weather=weather,
            )
        )
