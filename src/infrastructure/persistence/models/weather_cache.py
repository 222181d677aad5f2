"""Weather cache model.

Keyed by "{longitude},{latitude}" (unique). Same lifecycle as the geolocation
cache with a shorter freshness window.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class WeatherCacheEntry(BaseModel):
    """Cached current weather for one coordinate pair.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: Insert timestamp (from BaseModel)
        coordinates: Cache key "{longitude},{latitude}" (unique)
        condition: Condition group ("Clear")
        temperature: Temperature in configured units
        icon: Provider icon identifier
        expires_at: When the entry becomes stale
    """

    __tablename__ = "weather_cache"

    coordinates: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Cache key: longitude,latitude",
    )

    condition: Mapped[str] = mapped_column(String(50), nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    icon: Mapped[str] = mapped_column(String(20), nullable=False)

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Advisory expiry (not enforced on read)",
    )
