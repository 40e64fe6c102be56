"""
NoteKeep Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session:  AsyncMock session for pure unit tests
    ├── db_engine:        in-memory SQLite engine with all tables created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       one AsyncSession for service-level tests
    ├── make_client:      builds HTTPX AsyncClients (one cookie jar each)
    └── client:           a single AsyncClient for endpoint tests

Every endpoint test runs against a fresh database: get_db_session is
overridden to hand out sessions from the per-test engine.
"""

import os

# Override settings for testing BEFORE any notekeep imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum; keeps the suite fast
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notekeep.database import Base, build_engine, get_db_session
from notekeep.main import app
import notekeep.models  # noqa: F401


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        note = await NoteService(mock_db_session).find_by_id(1)
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
def sample_note_data():
    """Field values for building transient Note instances."""
    now = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    return {
        "id": 7,
        "title": "Groceries",
        "content": "eggs, milk",
        "created_at": now,
        "updated_at": now,
        "user_id": 1,
    }


@pytest.fixture
def user_data():
    """Default registration payload (camelCase, as the frontend sends it)."""
    return {
        "username": "alice",
        "fullName": "Alice A",
        "email": "a@x.com",
        "password": "secret1",
    }


@pytest.fixture
def second_user_data():
    return {
        "username": "bob",
        "fullName": "Bob B",
        "email": "b@x.com",
        "password": "secret2",
    }


# ══════════════════════════════════════════════════════════════════════════
# Database fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite shared through StaticPool, tables created per test."""
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# HTTP client fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def make_client(session_factory):
    """
    Factory for AsyncClients talking to the app over ASGITransport.

    Each client keeps its own cookie jar, so two clients are two
    independent browser sessions (e.g. alice and bob).
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    @asynccontextmanager
    async def _make():
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

    yield _make

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(make_client):
    async with make_client() as c:
        yield c


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════

async def register(client: AsyncClient, data: dict):
    return await client.post("/api/auth/register", json=data)


async def login(client: AsyncClient, email: str, password: str):
    return await client.post("/api/auth/login", json={"email": email, "password": password})


async def register_and_login(client: AsyncClient, data: dict) -> None:
    """Register `data` and leave `client` holding its session cookie."""
    r1 = await register(client, data)
    assert r1.status_code == 200, r1.text
    r2 = await login(client, data["email"], data["password"])
    assert r2.status_code == 200, r2.text


def naive(timestamp: str) -> datetime:
    """
    Parse an API timestamp and drop the offset.

    SQLite returns naive datetimes while freshly created rows still hold
    the aware value, so comparisons across requests ignore the offset.
    """
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).replace(tzinfo=None)
