"""create_enrichment_tables

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a7d9b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create sessions, work queue and cache tables."""
    op.create_table(
        "sessions",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "ip_address",
            sa.String(length=45),
            nullable=False,
            comment="Client IP address at session creation",
        ),
        sa.Column(
            "geo",
            sa.JSON(none_as_null=True),
            nullable=True,
            comment="Geolocation resolved from ip_address",
        ),
        sa.Column(
            "weather",
            sa.JSON(none_as_null=True),
            nullable=True,
            comment="Weather at the resolved coordinates",
        ),
        sa.Column(
            "enriched_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="When enrichment data was merged",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "pending_session_enrichments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "geo_cache",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "ip_address",
            sa.String(length=45),
            nullable=False,
            comment="Source address (cache key)",
        ),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("country_code", sa.String(length=10), nullable=True),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("region_code", sa.String(length=20), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Advisory expiry (not enforced on read)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("ip_address"),
    )

    op.create_table(
        "weather_cache",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "coordinates",
            sa.String(length=100),
            nullable=False,
            comment="Cache key: longitude,latitude",
        ),
        sa.Column("condition", sa.String(length=50), nullable=False),
        sa.Column("temperature", sa.Float(), nullable=False),
        sa.Column("icon", sa.String(length=20), nullable=False),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Advisory expiry (not enforced on read)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("coordinates"),
    )


def downgrade() -> None:
    """Drop enrichment tables."""
    op.drop_table("weather_cache")
    op.drop_table("geo_cache")
    op.drop_table("pending_session_enrichments")
    op.drop_table("sessions")
