"""Database engine and session management."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from badge_registry.config.settings import get_settings
from badge_registry.db.models import Base


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine, preparing the directory of SQLite files."""

    if database_url.startswith("sqlite"):
        database_path = Path(make_url(database_url).database or "")
        if database_path.parent:
            database_path.parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(database_url, echo=False, future=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@lru_cache
def get_engine() -> AsyncEngine:
    """Return the process-wide engine for the configured database."""

    return build_engine(get_settings().database_url)


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create database tables if they do not exist."""

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
