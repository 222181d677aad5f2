"""Background job scheduling for the enrichment worker."""

from src.infrastructure.jobs.scheduler import EnrichmentScheduler

__all__ = ["EnrichmentScheduler"]
