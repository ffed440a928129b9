"""
TxtStore — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own throwaway SQLite database, so tests exercise
       real SQL (INSERT/DELETE ... RETURNING, AUTOINCREMENT) without needing
       a PostgreSQL server.
How:   aiosqlite-backed async engine in pytest's tmp_path, wrapped in a real
       RecordStore; the app is driven through HTTPX's ASGITransport.

Fixture Hierarchy (all function-scoped):
    ├── store:          RecordStore over a fresh database, schema applied
    ├── empty_store:    RecordStore over a fresh database, no schema yet
    ├── broken_store:   RecordStore whose database file can never be opened
    ├── test_client:    AsyncClient bound to create_app(store)
    └── broken_client:  AsyncClient bound to create_app(broken_store)
"""

import os

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from txtstore.bootstrap import ensure_schema  # noqa: E402
from txtstore.main import create_app  # noqa: E402
from txtstore.services.record_store import RecordStore  # noqa: E402


def make_store(url: str, timeout: float = 5.0) -> RecordStore:
    """
    RecordStore over `url` with one connection per call.

    NullPool lets concurrent SQLite writers each hold their own connection
    and queue on the database lock instead of sharing one connection.
    """
    engine = create_async_engine(url, poolclass=NullPool)
    return RecordStore(engine, timeout=timeout)


@pytest_asyncio.fixture
async def store(tmp_path):
    """A Record Store over an empty database with the schema applied."""
    record_store = make_store(f"sqlite+aiosqlite:///{tmp_path / 'txtstore.db'}")
    await ensure_schema(record_store, attempts=1)
    yield record_store
    await record_store.close()


@pytest_asyncio.fixture
async def empty_store(tmp_path):
    """A Record Store over an empty database with no schema applied yet."""
    record_store = make_store(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    yield record_store
    await record_store.close()


@pytest_asyncio.fixture
async def broken_store(tmp_path):
    """
    A Record Store whose every call fails at connect time.

    The database path sits in a directory that does not exist, so SQLite
    raises "unable to open database file", which simulates a lost database.
    """
    record_store = make_store(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'txtstore.db'}"
    )
    yield record_store
    await record_store.close()


@pytest_asyncio.fixture
async def test_client(store):
    """
    Async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    app = create_app(store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(broken_store):
    """Async HTTP client against an app whose database is unreachable."""
    app = create_app(broken_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
