"""Async SQLAlchemy engine and session factory.

When DATABASE_URL is set (e.g. ``postgresql+asyncpg://...``) this module
creates the engine and a session factory at import time.  Without it both
are None and the API serves the seeded in-memory repositories instead.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from learning_api.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for every table in learning_api.db.tables."""


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    kwargs: dict[str, object] = {"echo": echo}
    if make_url(database_url).get_backend_name() != "sqlite":
        # SQLite uses a static/singleton pool; sizing only applies to servers.
        kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)
    return create_async_engine(database_url, **kwargs)


if SETTINGS.database_url:
    engine: AsyncEngine | None = build_engine(
        SETTINGS.database_url, echo=SETTINGS.is_dev and SETTINGS.log_level == "debug"
    )
    async_session_factory: async_sessionmaker[AsyncSession] | None = (
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    )
else:
    engine = None
    async_session_factory = None


async def get_async_session() -> AsyncGenerator[AsyncSession | None, None]:
    """Yield a request-scoped session; commit on success, roll back on error.

    Yields None when no database is configured, so callers can fall back
    to the in-memory repositories.
    """
    if async_session_factory is None:
        yield None
        return
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def ping_database() -> bool:
    """Return True if a trivial query succeeds on the configured engine."""
    if engine is None:
        return False
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database ping failed")
        return False
    return True


@asynccontextmanager
async def lifespan_db():
    if engine is None:
        logger.info("No DATABASE_URL configured; serving in-memory demo data")
        yield
        return

    logger.info(
        "Database engine created: %s", engine.url.render_as_string(hide_password=True)
    )
    yield
    await engine.dispose()
    logger.info("Database engine disposed")
