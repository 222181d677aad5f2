"""Enrichment commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class EnrichSession:
    """Enrich one session from a dequeued work item.

    Attributes:
        session_id: Session identifier (equals the work item id).
        was_present: Whether the work item was actually removed by this
            worker. False means skip: no lookups, no write.

    Example:
        >>> command = EnrichSession(session_id=item.id, was_present=item.was_present)
        >>> result = await handler.handle(command)
    """

    session_id: UUID
    was_present: bool = True


@dataclass(frozen=True, kw_only=True)
class RunEnrichmentBatch:
    """Drain the pending queue and enrich every dequeued session.

    Issued by the scheduler on every tick. Carries no data: the batch is
    whatever is pending when the queue is drained.
    """
