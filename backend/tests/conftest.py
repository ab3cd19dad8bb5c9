"""
Daily Diet Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── database: creates every table in a temporary SQLite file, drops after
    ├── test_client: HTTPX AsyncClient bound to the app (depends on database)
    ├── client_factory: extra clients, each with its own cookie jar (session)
    └── meal_payload: a valid POST /meals body
"""

import os
import tempfile

# Settings are read at import time: point them at a throwaway SQLite file
# before anything from dailydiet is imported.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="dailydiet_test_")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TEST_DB_DIR, "test.db")
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import AsyncExitStack  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from dailydiet.database import Base, engine  # noqa: E402
from dailydiet.models.meal import Meal  # noqa: E402,F401
from dailydiet.models.user import User  # noqa: E402,F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_meal(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = meal
            result = await meal_service.get_meal(mock_db_session, user_id, meal_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """
    Fresh schema for each test.

    The engine is disposed afterwards so no pooled connection outlives the
    test's event loop.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


def _new_client() -> AsyncClient:
    from dailydiet.main import app
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to the app in-process.

    The client keeps cookies between requests, so registering through it
    opens a session used by every later call.
    """
    async with _new_client() as client:
        yield client


@pytest_asyncio.fixture
async def client_factory(database):
    """Builds additional clients, each acting as a separate browser session."""
    async with AsyncExitStack() as stack:
        async def make_client() -> AsyncClient:
            return await stack.enter_async_context(_new_client())

        yield make_client


@pytest.fixture
def meal_payload():
    return {
        "name": "Oatmeal",
        "description": "Oats with banana and cinnamon",
        "dateTime": "2024-01-15T08:30:00",
        "isOnDiet": True,
    }
