"""Unit tests for EnrichSessionHandler.

Tests cover:
- Full enrichment (geo + weather merged)
- Geo absent: weather chain never invoked, both fields cleared
- Weather absent: geo merged, weather cleared
- Work item not actually present: no lookup, no write
- Session deleted before processing: no lookup, no write
- Session deleted between lookup and merge
- No storage scope open while the lookups run

Architecture:
- Unit tests for application handler (mocked dependencies)
- Chains and repository are AsyncMocks
- Repository handed out through an async context manager provider
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.commands import EnrichSession
from src.application.commands.handlers.enrich_session_handler import (
    EnrichSessionError,
    EnrichSessionHandler,
    EnrichSessionResponse,
)
from src.core.result import Failure, Success
from src.domain.entities import EnrichableSession


class _RepoScopes:
    """Hand out the same repository and record how scopes are opened."""

    def __init__(self, repo):
        self.repo = repo
        self.opened = 0
        self.open_now = 0

    @asynccontextmanager
    async def __call__(self):
        self.opened += 1
        self.open_now += 1
        try:
            yield self.repo
        finally:
            self.open_now -= 1


def _handler(session_repo, geo_chain, weather_chain, logger) -> EnrichSessionHandler:
    scopes = session_repo
    if not isinstance(scopes, _RepoScopes):
        scopes = _RepoScopes(session_repo)
    return EnrichSessionHandler(
        session_repo_provider=scopes,
        geo_chain=geo_chain,
        weather_chain=weather_chain,
        logger=logger,
    )


@pytest.fixture
def session_id():
    return uuid7()


@pytest.fixture
def session_repo(session_id):
    repo = AsyncMock()
    repo.find_by_id.return_value = EnrichableSession(
        id=session_id, ip_address="8.8.8.8"
    )
    repo.apply_enrichment.return_value = True
    return repo


@pytest.mark.unit
class TestEnrichSessionHandlerSuccess:
    """Test the enrich path."""

    @pytest.mark.asyncio
    async def test_merges_geo_and_weather(
        self, session_id, session_repo, mock_logger, sample_geo, sample_weather
    ):
        """Geo then weather are resolved and written in one merge."""
        geo_chain = AsyncMock()
        geo_chain.resolve.return_value = sample_geo
        weather_chain = AsyncMock()
        weather_chain.resolve.return_value = sample_weather
        handler = _handler(session_repo, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(EnrichSession(session_id=session_id))

        assert isinstance(result, Success)
        assert result.value == EnrichSessionResponse(
            session_id=session_id, geo=sample_geo, weather=sample_weather
        )
        geo_chain.resolve.assert_awaited_once_with("8.8.8.8")
        weather_chain.resolve.assert_awaited_once_with(sample_geo)
        session_repo.apply_enrichment.assert_awaited_once_with(
            session_id, geo=sample_geo, weather=sample_weather
        )

    @pytest.mark.asyncio
    async def test_absent_geo_short_circuits_weather(
        self, session_id, session_repo, mock_logger
    ):
        """No geolocation means no weather lookup; both fields written as None."""
        geo_chain = AsyncMock()
        geo_chain.resolve.return_value = None
        weather_chain = AsyncMock()
        handler = _handler(session_repo, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(EnrichSession(session_id=session_id))

        assert isinstance(result, Success)
        assert result.value.geo is None
        assert result.value.weather is None
        weather_chain.resolve.assert_not_called()
        session_repo.apply_enrichment.assert_awaited_once_with(
            session_id, geo=None, weather=None
        )

    @pytest.mark.asyncio
    async def test_absent_weather_keeps_geo(
        self, session_id, session_repo, mock_logger, sample_geo
    ):
        """Weather failure does not discard the geolocation."""
        geo_chain = AsyncMock()
        geo_chain.resolve.return_value = sample_geo
        weather_chain = AsyncMock()
        weather_chain.resolve.return_value = None
        handler = _handler(session_repo, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(EnrichSession(session_id=session_id))

        assert isinstance(result, Success)
        session_repo.apply_enrichment.assert_awaited_once_with(
            session_id, geo=sample_geo, weather=None
        )


@pytest.mark.unit
class TestEnrichSessionHandlerNoWrite:
    """Test the paths that must not write anything."""

    @pytest.mark.asyncio
    async def test_item_not_present_is_skipped(
        self, session_id, session_repo, mock_logger
    ):
        """An item another worker removed is skipped without any lookup."""
        geo_chain = AsyncMock()
        weather_chain = AsyncMock()
        handler = _handler(session_repo, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(
            EnrichSession(session_id=session_id, was_present=False)
        )

        assert result == Failure(error=EnrichSessionError.WORK_ITEM_NOT_PRESENT)
        session_repo.find_by_id.assert_not_called()
        geo_chain.resolve.assert_not_called()
        session_repo.apply_enrichment.assert_not_called()

    @pytest.mark.asyncio
    async def test_deleted_session_is_silent_noop(self, session_id, mock_logger):
        """Missing session: no external calls, no write, no error log."""
        session_repo = AsyncMock()
        session_repo.find_by_id.return_value = None
        geo_chain = AsyncMock()
        weather_chain = AsyncMock()
        handler = _handler(session_repo, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(EnrichSession(session_id=session_id))

        assert result == Failure(error=EnrichSessionError.SESSION_NOT_FOUND)
        geo_chain.resolve.assert_not_called()
        weather_chain.resolve.assert_not_called()
        session_repo.apply_enrichment.assert_not_called()
        mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_session_deleted_before_merge(
        self, session_id, session_repo, mock_logger, sample_geo
    ):
        """Merge that matches no row is reported as a missing session."""
        session_repo.apply_enrichment.return_value = False
        geo_chain = AsyncMock()
        geo_chain.resolve.return_value = sample_geo
        weather_chain = AsyncMock()
        weather_chain.resolve.return_value = None
        handler = _handler(session_repo, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(EnrichSession(session_id=session_id))

        assert result == Failure(error=EnrichSessionError.SESSION_NOT_FOUND)
        mock_logger.error.assert_not_called()


@pytest.mark.unit
class TestEnrichSessionHandlerStorageScopes:
    """Test that storage is only held for the lookup and the merge."""

    @pytest.mark.asyncio
    async def test_no_scope_open_while_lookups_run(
        self, session_id, session_repo, mock_logger, sample_geo, sample_weather
    ):
        """Lookup and merge use two short scopes, neither spans the chains."""
        scopes = _RepoScopes(session_repo)
        open_during_chains = []

        async def resolve_geo(ip_address):
            open_during_chains.append(scopes.open_now)
            return sample_geo

        async def resolve_weather(geo):
            open_during_chains.append(scopes.open_now)
            return sample_weather

        geo_chain = AsyncMock()
        geo_chain.resolve.side_effect = resolve_geo
        weather_chain = AsyncMock()
        weather_chain.resolve.side_effect = resolve_weather
        handler = _handler(scopes, geo_chain, weather_chain, mock_logger)

        result = await handler.handle(EnrichSession(session_id=session_id))

        assert isinstance(result, Success)
        assert open_during_chains == [0, 0]
        assert scopes.opened == 2
        assert scopes.open_now == 0

    @pytest.mark.asyncio
    async def test_missing_session_opens_single_scope(self, session_id, mock_logger):
        """A deleted session only costs the lookup scope."""
        session_repo = AsyncMock()
        session_repo.find_by_id.return_value = None
        scopes = _RepoScopes(session_repo)
        handler = _handler(scopes, AsyncMock(), AsyncMock(), mock_logger)

        await handler.handle(EnrichSession(session_id=session_id))

        assert scopes.opened == 1
