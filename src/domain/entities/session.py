"""Enrichable session entity.

A session is created by the API that accepts client connections (outside this
worker). The worker only reads its source address and writes the geolocation
and weather snapshots back once.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.value_objects import GeoSnapshot, WeatherSnapshot


@dataclass(slots=True, kw_only=True)
class EnrichableSession:
    """Client connection event awaiting (or holding) enrichment data.

    Attributes:
        id: Session identifier (shared with its pending work item).
        ip_address: Client source address.
        geo: Geolocation snapshot, None until enriched or when unresolvable.
        weather: Weather snapshot, None until enriched or when unresolvable.
        created_at: When the session was recorded.
        enriched_at: When the worker merged enrichment data.
    """

    id: UUID
    ip_address: str
    geo: GeoSnapshot | None = None
    weather: WeatherSnapshot | None = None
    created_at: datetime | None = None
    enriched_at: datetime | None = None

    @property
    def is_enriched(self) -> bool:
        """Whether the worker has already merged a result into this session."""
        return self.enriched_at is not None
