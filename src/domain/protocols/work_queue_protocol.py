"""Work queue protocol for pending session enrichments.

The queue holds one item per session awaiting enrichment. Producers (the API
that records sessions) enqueue; the worker drains everything at once.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities import DequeuedWorkItem


class WorkQueue(Protocol):
    """Pending-enrichment queue port.

    Example:
        >>> items = await queue.take_all_pending()
        >>> for item in items:
        ...     if not item.was_present:
        ...         continue  # another worker took it
    """

    async def take_all_pending(self) -> list[DequeuedWorkItem]:
        """Atomically remove every queued item and return what was removed.

        Under concurrent drains an item may be observed but removed by someone
        else; it is returned with ``was_present=False``.

        Returns:
            Dequeued items, empty list when the queue is empty (never None).
        """
        ...

    async def enqueue(self, session_id: UUID) -> None:
        """Queue a session for enrichment (no-op if already queued).

        Args:
            session_id: Session identifier.
        """
        ...
