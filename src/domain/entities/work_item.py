"""Pending enrichment work items."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class DequeuedWorkItem:
    """A work item removed from the pending queue.

    The id always equals the target session's id. ``was_present`` is False
    when the item was seen in the queue but another worker removed it first;
    such items are skipped, never treated as errors.

    Attributes:
        id: Session identifier the item refers to.
        was_present: Whether this worker actually removed the item.
    """

    id: UUID
    was_present: bool
