"""
Database configuration.
Async engine, session factory and the per-request session dependency.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.exc import PendingRollbackError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from .config import DatabaseSettings, settings

logger = logging.getLogger(__name__)


def _engine_kwargs(db_settings: DatabaseSettings) -> Dict[str, Any]:
    """Engine options for the configured backend."""
    kwargs: Dict[str, Any] = {"echo": db_settings.echo, "future": True}

    if db_settings.is_sqlite:
        # Wait on the database lock instead of failing immediately when two
        # writers race (e.g. concurrent claims).
        kwargs["connect_args"] = {"timeout": 30}
        return kwargs

    kwargs.update(
        pool_pre_ping=True,
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        pool_timeout=db_settings.pool_timeout,
        pool_recycle=db_settings.pool_recycle,
        connect_args={
            "server_settings": {"application_name": settings.api.app_name},
            "command_timeout": 60,
            "timeout": 30,
        },
    )
    return kwargs


def build_engine(db_settings: DatabaseSettings) -> AsyncEngine:
    """Create an async engine from database settings."""
    return create_async_engine(db_settings.url, **_engine_kwargs(db_settings))


engine = build_engine(settings.database)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Prevent additional queries after commit
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.
    Commits whatever is still pending when the handler returns and rolls
    back on error.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            if session.in_transaction():
                try:
                    await session.commit()
                except PendingRollbackError:
                    await session.rollback()
                    raise
        except Exception:
            await session.rollback()
            raise


async def ping_database() -> bool:
    """Return True when the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database ping failed: {type(e).__name__}: {e}")
        return False


async def init_db() -> None:
    """
    Create all tables that do not exist yet.
    Should be called on application startup.
    """
    # Register table models on the metadata
    import db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db() -> None:
    """
    Close database connections.
    Should be called on application shutdown.
    """
    await engine.dispose()
