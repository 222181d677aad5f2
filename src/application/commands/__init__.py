"""Enrichment commands and their handlers."""

from src.application.commands.enrichment_commands import (
    EnrichSession,
    RunEnrichmentBatch,
)

__all__ = ["EnrichSession", "RunEnrichmentBatch"]
