"""
Devotionals API - Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── test_settings:   Settings pointing at a temporary SQLite file
    ├── database:        Database with the schema created, disposed afterwards
    ├── db_session:      Real AsyncSession on that database
    ├── test_app:        FastAPI app built by create_app(test_settings)
    └── test_client:     HTTPX AsyncClient talking to test_app in-process
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Keep the module-level default app away from the working directory's DB
# and quiet during tests. Must run before devotional_api is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from devotional_api.config import Settings
from devotional_api.database import Database
from devotional_api.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
            await devotional_service.get_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated SQLite database file under tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
        rate_limit_requests=10000,
        password_min_length=8,
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with all tables created; engine disposed after the test."""
    db = Database(test_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """A real AsyncSession; callers commit when they need durability."""
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    Application under test.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    app = create_app(test_settings)
    await app.state.database.create_schema()
    yield app
    await app.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
