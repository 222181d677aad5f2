"""Pending session enrichment model (the work queue).

One row per session awaiting enrichment. The row id IS the session id, so a
session can be queued at most once. Rows are consumed (deleted) in bulk when a
batch starts.

No foreign key to sessions: a session may be deleted while its work item is
still queued, and the worker treats that as a no-op.
"""

from src.infrastructure.persistence.base import BaseModel


class PendingEnrichment(BaseModel):
    """Queued enrichment request.

    Fields:
        id: Target session's id (primary key, from BaseModel)
        created_at: When the session was queued (from BaseModel)
    """

    __tablename__ = "pending_session_enrichments"
