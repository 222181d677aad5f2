"""Run enrichment batch handler.

Flow:
1. Take the run guard without waiting (busy -> skip this tick)
2. Drain the pending queue in one atomic step
3. Dispatch every work item concurrently (at most max_concurrency in flight),
   each through its own item handler
4. Wait for every item to settle, tally outcomes, release the guard

Architecture:
- Per-item handlers are created through an injected async context manager
  factory; storage scopes are short and opened inside the item handler
- The concurrency cap keeps in-flight items below the storage pool size
- Item crashes are logged and counted; they never abort the batch and nothing
  propagates to the scheduler
"""

import asyncio
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from src.application.commands.enrichment_commands import (
    EnrichSession,
    RunEnrichmentBatch,
)
from src.application.commands.handlers.enrich_session_handler import (
    EnrichSessionError,
    EnrichSessionHandler,
    EnrichSessionResponse,
)
from src.application.services.run_guard import RunGuard
from src.core.constants import ENRICHMENT_MAX_CONCURRENCY_DEFAULT
from src.core.result import Failure, Result, Success
from src.domain.entities import DequeuedWorkItem
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.work_queue_protocol import WorkQueue

type WorkQueueProvider = Callable[[], AbstractAsyncContextManager[WorkQueue]]
type EnrichSessionHandlerProvider = Callable[
    [], AbstractAsyncContextManager[EnrichSessionHandler]
]


class RunEnrichmentBatchError:
    """Run enrichment batch error reasons."""

    RUN_IN_PROGRESS = "run_in_progress"
    QUEUE_DRAIN_FAILED = "queue_drain_failed"


@dataclass(frozen=True, kw_only=True)
class EnrichmentBatchSummary:
    """Outcome counts for one batch.

    Attributes:
        dequeued: Items returned by the queue drain.
        enriched: Sessions updated.
        skipped: Items another worker removed first.
        missing_sessions: Items whose session no longer exists.
        failed: Items that raised unexpectedly.
    """

    dequeued: int = 0
    enriched: int = 0
    skipped: int = 0
    missing_sessions: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/printing.

        Returns:
            Dict representation of the summary.
        """
        return {
            "dequeued": self.dequeued,
            "enriched": self.enriched,
            "skipped": self.skipped,
            "missing_sessions": self.missing_sessions,
            "failed": self.failed,
        }


class RunEnrichmentBatchHandler:
    """Handler for the batch command issued on every scheduler tick."""

    def __init__(
        self,
        work_queue_provider: WorkQueueProvider,
        item_handler_provider: EnrichSessionHandlerProvider,
        run_guard: RunGuard,
        logger: LoggerProtocol,
        max_concurrency: int = ENRICHMENT_MAX_CONCURRENCY_DEFAULT,
    ) -> None:
        """Initialize batch handler with dependencies.

        Args:
            work_queue_provider: Opens a work queue bound to a storage session.
            item_handler_provider: Opens a per-item EnrichSessionHandler.
            run_guard: Guard shared by every tick of this process.
            logger: Structured logger.
            max_concurrency: Upper bound on items processed at the same time.
        """
        self._work_queue_provider = work_queue_provider
        self._item_handler_provider = item_handler_provider
        self._run_guard = run_guard
        self._logger = logger
        self._max_concurrency = max_concurrency

    async def handle(
        self, cmd: RunEnrichmentBatch
    ) -> Result[EnrichmentBatchSummary, str]:
        """Handle run enrichment batch command.

        Args:
            cmd: RunEnrichmentBatch command (no fields).

        Returns:
            Success(EnrichmentBatchSummary) once every item has settled.
            Failure(RunEnrichmentBatchError.RUN_IN_PROGRESS) if a previous
            batch still holds the guard.
            Failure(RunEnrichmentBatchError.QUEUE_DRAIN_FAILED) if the queue
            could not be drained.
        """
        async with self._run_guard.hold() as acquired:
            if not acquired:
                self._logger.debug("enrichment_batch_skipped_run_in_progress")
                return Failure(error=RunEnrichmentBatchError.RUN_IN_PROGRESS)
            return await self._run()

    async def _run(self) -> Result[EnrichmentBatchSummary, str]:
        log = self._logger.bind(batch_id=str(uuid4()))

        try:
            async with self._work_queue_provider() as queue:
                items = await queue.take_all_pending()
        except Exception as e:
            log.error("enrichment_queue_drain_failed", error=e)
            return Failure(error=RunEnrichmentBatchError.QUEUE_DRAIN_FAILED)

        if not items:
            return Success(value=EnrichmentBatchSummary())

        log.info("enrichment_batch_started", dequeued=len(items))

        slots = asyncio.Semaphore(self._max_concurrency)
        outcomes = await asyncio.gather(
            *(self._process_item(item, slots) for item in items),
            return_exceptions=True,
        )

        summary = self._summarize(items, outcomes, log)
        log.info("enrichment_batch_finished", **summary.to_dict())
        return Success(value=summary)

    async def _process_item(
        self, item: DequeuedWorkItem, slots: asyncio.Semaphore
    ) -> Result[EnrichSessionResponse, str]:
        async with slots, self._item_handler_provider() as handler:
            return await handler.handle(
                EnrichSession(session_id=item.id, was_present=item.was_present)
            )

    def _summarize(
        self,
        items: list[DequeuedWorkItem],
        outcomes: list[Any],
        log: LoggerProtocol,
    ) -> EnrichmentBatchSummary:
        enriched = skipped = missing = failed = 0

        for item, outcome in zip(items, outcomes, strict=True):
            match outcome:
                case Success():
                    enriched += 1
                case Failure(error=EnrichSessionError.WORK_ITEM_NOT_PRESENT):
                    skipped += 1
                case Failure(error=EnrichSessionError.SESSION_NOT_FOUND):
                    missing += 1
                case BaseException():
                    failed += 1
                    log.error(
                        "enrichment_item_failed",
                        error=outcome if isinstance(outcome, Exception) else None,
                        session_id=str(item.id),
                    )
                case _:
                    failed += 1
                    log.error(
                        "enrichment_item_failed",
                        session_id=str(item.id),
                        outcome=repr(outcome),
                    )

        return EnrichmentBatchSummary(
            dequeued=len(items),
            enriched=enriched,
            skipped=skipped,
            missing_sessions=missing,
            failed=failed,
        )
