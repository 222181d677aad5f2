"""Domain entities."""

from src.domain.entities.session import EnrichableSession
from src.domain.entities.work_item import DequeuedWorkItem

__all__ = ["DequeuedWorkItem", "EnrichableSession"]
