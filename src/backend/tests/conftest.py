"""
Pytest configuration and fixtures for testing.

Provides:
- Database fixtures (a fresh SQLite file per test, airports seeded)
- An application wired to that database
- An httpx client for API tests
- Broadcaster fixtures with fake subscribers

Usage:
    pytest src/backend/tests -v
"""

import asyncio
import os

# Configure the app for tests before anything imports core.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_ENABLE_FILE_LOGGING"] = "false"

from typing import AsyncGenerator, List, Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import db.models  # noqa: F401  (register tables)
from app import create_app
from core.database import get_session
from db.setup import setup_database_default_data
from api.services.event_publisher import ConnectionRegistry, EventBroadcaster


# ============================================================================
# Database Fixtures
# ============================================================================

def build_test_engine(db_path) -> AsyncEngine:
    """File-backed SQLite engine.

    NullPool gives every session its own connection, so concurrent sessions
    really compete for the database like separate API workers would.
    """
    return create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )


async def prepare_database(engine: AsyncEngine) -> None:
    """Create tables and seed airports."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await setup_database_default_data(session)


def session_override(factory: async_sessionmaker):
    """get_session replacement bound to a test engine."""

    async def _get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                if session.in_transaction():
                    await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _get_session


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = build_test_engine(tmp_path / "groundops_test.db")
    await prepare_database(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session


# ============================================================================
# Broadcast Fixtures
# ============================================================================

class FakeSubscriber:
    """Stands in for a WebSocket: records frames, can fail or stall on demand."""

    def __init__(self, *, fail: bool = False, delay: Optional[float] = None):
        self.fail = fail
        self.delay = delay
        self.frames: List[str] = []
        self.closed = False
        self.close_code: Optional[int] = None

    async def send_text(self, data: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionResetError("peer went away")
        self.frames.append(data)

    async def close(self, code: int = 1000, reason: Optional[str] = None) -> None:
        self.closed = True
        self.close_code = code


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.fixture
def broadcaster(registry) -> EventBroadcaster:
    return EventBroadcaster(registry, send_timeout=0.5)


@pytest_asyncio.fixture
async def listener(registry) -> FakeSubscriber:
    """A healthy subscriber registered on the broadcaster."""
    subscriber = FakeSubscriber()
    await registry.register(subscriber)
    return subscriber


# ============================================================================
# Application Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def app(session_factory):
    """Application bound to the per-test database (lifespan not run)."""
    application = create_app()
    application.dependency_overrides[get_session] = session_override(session_factory)
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def app_listener(app) -> FakeSubscriber:
    """A subscriber registered on the application's own broadcaster."""
    subscriber = FakeSubscriber()
    await app.state.connection_registry.register(subscriber)
    return subscriber


def auth_headers(user_id: str, display_name: Optional[str] = None) -> dict:
    headers = {"X-User-Id": user_id}
    if display_name:
        headers["X-User-Name"] = display_name
    return headers
