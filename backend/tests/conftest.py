"""
Programmers Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── sample_programmer_data: field values for building Programmer rows
    ├── test_client: HTTPX AsyncClient on a fresh app + empty SQLite database,
    │                no XSRF cookie (exercises the XSRF middleware)
    └── api_client: same, with a matching XSRF cookie and header preset
"""

import os
import tempfile

# Settings are read at import time: environment first, app imports after
_TEST_DIR = tempfile.mkdtemp(prefix="programmers_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["WEAK_PASSWORD_HASHING"] = "true"
os.environ["XSRF_ENABLED"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

XSRF_TOKEN = "test-xsrf-token-0123456789abcdefghijklmnop"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = programmer
        result = await programmer_service.get_programmer(mock_db_session, 1)
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


@pytest.fixture
def sample_programmer_data():
    now = datetime.now(timezone.utc)
    return {
        "id": 1,
        "name": "Ada Lovelace",
        "experience": 12.5,
        "password_hash": "$argon2id$v=19$m=8,t=1,p=1$c29tZXNhbHQ$aGFzaA",
        "created_at": now,
        "updated_at": now,
    }


async def _fresh_database():
    from app.database import Base, create_tables, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await create_tables()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to a freshly built app over ASGITransport.

    Each test starts with an empty `programmers` table; the engine is
    disposed afterwards so no pooled connection outlives the test's event loop.
    """
    from app.database import dispose_engine
    from app.main import create_app

    await _fresh_database()
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await dispose_engine()


@pytest_asyncio.fixture
async def api_client(test_client):
    """test_client with the Angular XSRF cookie/header pair already in place."""
    test_client.cookies.set("XSRF-TOKEN", XSRF_TOKEN)
    test_client.headers["X-XSRF-TOKEN"] = XSRF_TOKEN
    yield test_client
