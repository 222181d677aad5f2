"""Pytest configuration for async testing.

This configuration provides:
1. Custom markers (unit, integration)
2. Automatic asyncio marker on coroutine tests
3. A mock logger satisfying LoggerProtocol
4. A file-backed SQLite database per test (aiosqlite), so concurrent
   sessions see each other's commits like they would on PostgreSQL
"""

import asyncio
from unittest.mock import Mock

import pytest
import pytest_asyncio

from src.domain.value_objects import GeoSnapshot, WeatherSnapshot


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real storage/HTTP doubles"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double; bind() returns the same mock so calls stay observable."""
    logger = Mock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def sample_geo() -> GeoSnapshot:
    """Geolocation used across tests (Mountain View)."""
    return GeoSnapshot(
        latitude=37.386,
        longitude=-122.0838,
        country="United States",
        country_code="US",
        region="California",
        region_code="CA",
        city="Mountain View",
    )


@pytest.fixture
def sample_weather() -> WeatherSnapshot:
    """Weather used across tests."""
    return WeatherSnapshot(type="Clear", temperature=20.0, icon="01d")


@pytest_asyncio.fixture
async def database(tmp_path):
    """Provide a fresh SQLite database with all tables created.

    Yields:
        Database instance; disposed after the test.
    """
    from src.infrastructure.persistence.database import Database

    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'enrichment.db'}")
    await db.create_all()
    yield db
    await db.close()
