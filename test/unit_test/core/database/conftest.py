"""Test configuration for database unit tests.

This module provides common fixtures for testing the database layer with
in-memory SQLite. Every test gets its own engine, so tables start empty.
"""

from __future__ import annotations

from datetime import timedelta
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from notes_backend.core.database.base import utc_now_naive
from notes_backend.core.database.utils import create_all, create_sessionmaker


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture(scope="function")
def sample_user_data() -> dict:
    """Sample registration data as stored by the repository."""
    return {
        "name": "Alice",
        "email": "alice@example.com",
        "password": "$argon2id$v=19$m=65536,t=3,p=4$c2FsdHNhbHQ$aGFzaGhhc2hoYXNo",
        "verification_token": "token-123",
        "token_expires_at": utc_now_naive() + timedelta(hours=24),
    }
