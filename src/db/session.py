"""Async engine and per-request sessions for the bookmark store."""
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core.config import get_settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """Connection options for the configured backend (PostgreSQL, or SQLite in DEV_MODE)."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for a database URL."""
    return create_async_engine(database_url, echo=False, **_engine_options(database_url))


engine = build_engine(get_settings().database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield a session scoped to one request.

    Services run their statements without committing. The commit happens here once
    the request handler returns, and any exception rolls the whole request back, so
    a failed bookmark write never leaves a partial change behind.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
