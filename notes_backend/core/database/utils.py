"""
Engine, session factory and schema helpers.

Every engine of the application is built through ``create_engine`` so the
driver selection lives in one place: Postgres URLs are pinned to asyncpg,
SQLite URLs (used by the tests) get the thread check disabled, anything
else is handed to SQLAlchemy unchanged.
"""

from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base

# Register every table on Base.metadata
from . import entities  # noqa: F401

_POSTGRES_URL = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")


def normalize_database_url(db_url: str) -> str:
    """Rewrite ``postgres://``, ``postgresql://`` and ``postgresql+<driver>://`` to asyncpg."""
    return _POSTGRES_URL.sub("postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str) -> AsyncEngine:
    url = normalize_database_url(db_url)
    if url.startswith("sqlite"):
        return create_async_engine(url, connect_args={"check_same_thread": False})
    return create_async_engine(url, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay readable after commit."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create missing tables from the entity metadata.

    Used on startup and by the tests; schema changes ship as Alembic
    migrations.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
