"""Unit tests for RunEnrichmentBatchHandler.

Tests cover:
- Empty queue: Success with zero counts, no item handler opened
- Outcome tally (enriched, skipped, missing sessions, failed)
- Item exceptions are logged and counted, never propagated
- Queue drain failure returns QUEUE_DRAIN_FAILED
- Overlapping run is refused while the first batch's items are in flight
- Guard is released only after every item settles
- In-flight items never exceed max_concurrency

Architecture:
- Unit tests for application handler (mocked queue and item handlers)
- Providers are plain async context manager factories
"""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.commands import RunEnrichmentBatch
from src.application.commands.handlers.enrich_session_handler import (
    EnrichSessionError,
    EnrichSessionResponse,
)
from src.application.commands.handlers.run_enrichment_batch_handler import (
    EnrichmentBatchSummary,
    RunEnrichmentBatchError,
    RunEnrichmentBatchHandler,
)
from src.application.services import RunGuard
from src.core.result import Failure, Success
from src.domain.entities import DequeuedWorkItem


def _provider(obj):
    @asynccontextmanager
    async def scope():
        yield obj

    return scope


def _handler(
    queue, item_handler, logger, guard=None, max_concurrency=10
) -> RunEnrichmentBatchHandler:
    return RunEnrichmentBatchHandler(
        work_queue_provider=_provider(queue),
        item_handler_provider=_provider(item_handler),
        run_guard=guard or RunGuard(),
        logger=logger,
        max_concurrency=max_concurrency,
    )


@pytest.mark.unit
class TestRunEnrichmentBatchHandler:
    """Test batch orchestration."""

    @pytest.mark.asyncio
    async def test_empty_queue_is_silent_success(self, mock_logger):
        queue = AsyncMock()
        queue.take_all_pending.return_value = []
        item_handler = AsyncMock()
        handler = _handler(queue, item_handler, mock_logger)

        result = await handler.handle(RunEnrichmentBatch())

        assert result == Success(value=EnrichmentBatchSummary())
        item_handler.handle.assert_not_called()
        mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_tallies_every_outcome(self, mock_logger):
        """Each item outcome lands in exactly one counter."""
        enriched, skipped, missing, crashed = uuid7(), uuid7(), uuid7(), uuid7()
        queue = AsyncMock()
        queue.take_all_pending.return_value = [
            DequeuedWorkItem(id=enriched, was_present=True),
            DequeuedWorkItem(id=skipped, was_present=False),
            DequeuedWorkItem(id=missing, was_present=True),
            DequeuedWorkItem(id=crashed, was_present=True),
        ]

        async def handle(cmd):
            if cmd.session_id == enriched:
                return Success(
                    value=EnrichSessionResponse(
                        session_id=enriched, geo=None, weather=None
                    )
                )
            if cmd.session_id == skipped:
                assert cmd.was_present is False
                return Failure(error=EnrichSessionError.WORK_ITEM_NOT_PRESENT)
            if cmd.session_id == missing:
                return Failure(error=EnrichSessionError.SESSION_NOT_FOUND)
            raise RuntimeError("database went away")

        item_handler = AsyncMock()
        item_handler.handle.side_effect = handle
        handler = _handler(queue, item_handler, mock_logger)

        result = await handler.handle(RunEnrichmentBatch())

        assert result == Success(
            value=EnrichmentBatchSummary(
                dequeued=4, enriched=1, skipped=1, missing_sessions=1, failed=1
            )
        )
        assert item_handler.handle.await_count == 4
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "enrichment_item_failed"
        assert mock_logger.error.call_args.kwargs["session_id"] == str(crashed)

    @pytest.mark.asyncio
    async def test_queue_drain_failure(self, mock_logger):
        """Storage failure while draining is reported, not raised."""
        queue = AsyncMock()
        queue.take_all_pending.side_effect = ConnectionError("db down")
        handler = _handler(queue, AsyncMock(), mock_logger)

        result = await handler.handle(RunEnrichmentBatch())

        assert result == Failure(error=RunEnrichmentBatchError.QUEUE_DRAIN_FAILED)
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_overlapping_run_is_refused_until_items_settle(self, mock_logger):
        """A tick during in-flight item work is refused; guard frees afterwards."""
        item_started = asyncio.Event()
        release_item = asyncio.Event()

        queue = AsyncMock()
        queue.take_all_pending.side_effect = [
            [DequeuedWorkItem(id=uuid7(), was_present=True)],
            [],
        ]

        async def slow_handle(cmd):
            item_started.set()
            await release_item.wait()
            return Failure(error=EnrichSessionError.SESSION_NOT_FOUND)

        item_handler = AsyncMock()
        item_handler.handle.side_effect = slow_handle
        guard = RunGuard()
        handler = _handler(queue, item_handler, mock_logger, guard=guard)

        first = asyncio.create_task(handler.handle(RunEnrichmentBatch()))
        await item_started.wait()

        overlapping = await handler.handle(RunEnrichmentBatch())
        assert overlapping == Failure(error=RunEnrichmentBatchError.RUN_IN_PROGRESS)
        assert guard.is_running

        release_item.set()
        first_result = await first
        assert isinstance(first_result, Success)
        assert first_result.value.missing_sessions == 1
        assert not guard.is_running

        second = await handler.handle(RunEnrichmentBatch())
        assert second == Success(value=EnrichmentBatchSummary())
        assert queue.take_all_pending.await_count == 2

    @pytest.mark.asyncio
    async def test_in_flight_items_capped(self, mock_logger):
        """A large batch never runs more items at once than the cap allows."""
        queue = AsyncMock()
        queue.take_all_pending.return_value = [
            DequeuedWorkItem(id=uuid7(), was_present=True) for _ in range(7)
        ]
        active = 0
        peak = 0

        async def handle(cmd):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return Success(
                value=EnrichSessionResponse(
                    session_id=cmd.session_id, geo=None, weather=None
                )
            )

        item_handler = AsyncMock()
        item_handler.handle.side_effect = handle
        handler = _handler(queue, item_handler, mock_logger, max_concurrency=2)

        result = await handler.handle(RunEnrichmentBatch())

        assert result == Success(
            value=EnrichmentBatchSummary(dequeued=7, enriched=7)
        )
        assert peak == 2
