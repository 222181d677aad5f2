"""Geolocation cache model.

Keyed by IP address (unique). Entries are insert-if-absent and never updated;
expires_at is advisory and not checked on read.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class GeoCacheEntry(BaseModel):
    """Cached geolocation for one IP address.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Insert timestamp (from BaseModel)
        ip_address: Cache key (unique)
        country, country_code, region, region_code, city: Location names
        latitude, longitude: Coordinates
        expires_at: When the entry becomes stale
    """

    __tablename__ = "geo_cache"

    ip_address: Mapped[str] = mapped_column(
        String(45),
        nullable=False,
        unique=True,
        comment="Source address (cache key)",
    )

    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    region_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Advisory expiry (not enforced on read)",
    )
