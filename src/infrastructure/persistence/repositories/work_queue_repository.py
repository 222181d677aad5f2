"""WorkQueueRepository - SQLAlchemy implementation of WorkQueue protocol.

The queue is the ``pending_session_enrichments`` table. Draining it is a
snapshot read followed by one bulk ``DELETE ... RETURNING``:

    SELECT id FROM pending_session_enrichments            -> {a, b, c}
    DELETE ... WHERE id IN (a, b, c) RETURNING id         -> {a, c}

Ids present in the snapshot but not returned by the delete were removed by a
concurrent worker in between and come back with ``was_present=False``. Items
queued after the snapshot stay queued for the next batch.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import DequeuedWorkItem
from src.infrastructure.persistence.dialects import insert_if_absent
from src.infrastructure.persistence.models.pending_enrichment import (
    PendingEnrichment,
)


class WorkQueueRepository:
    """SQLAlchemy implementation of WorkQueue protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def take_all_pending(self) -> list[DequeuedWorkItem]:
        """Remove every queued item and report which removals were ours.

        Returns:
            One DequeuedWorkItem per snapshot id, in queue order. Empty list
            when nothing is queued (no DELETE issued).
        """
        snapshot_stmt = select(PendingEnrichment.id).order_by(
            PendingEnrichment.created_at
        )
        snapshot: list[UUID] = list((await self._session.scalars(snapshot_stmt)).all())

        if not snapshot:
            return []

        delete_stmt = (
            delete(PendingEnrichment)
            .where(PendingEnrichment.id.in_(snapshot))
            .returning(PendingEnrichment.id)
        )
        removed = set((await self._session.scalars(delete_stmt)).all())
        await self._session.commit()

        return [
            DequeuedWorkItem(id=item_id, was_present=item_id in removed)
            for item_id in snapshot
        ]

    async def enqueue(self, session_id: UUID) -> None:
        """Queue a session for enrichment (no-op if already queued).

        Args:
            session_id: Session identifier.
        """
        stmt = insert_if_absent(
            self._session,
            PendingEnrichment,
            {"id": session_id},
            conflict_columns=["id"],
        )
        await self._session.execute(stmt)
        await self._session.commit()
