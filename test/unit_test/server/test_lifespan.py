"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup creates the database tables and that a failing
database does not keep the application from starting.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.pool import StaticPool

from notes_backend.core.database import init_db
from notes_backend.server.main import lifespan

pytestmark = pytest.mark.asyncio

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_startup_initializes_database(self):
        app = FastAPI()

        with patch("notes_backend.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(app):
                mock_init_db.assert_awaited_once()

    async def test_startup_survives_database_failure(self):
        app = FastAPI()

        with (
            patch("notes_backend.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("notes_backend.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = ConnectionError("database unreachable")

            async with lifespan(app):
                pass

        mock_logger.error.assert_called_once()
        assert "database unreachable" in mock_logger.error.call_args[0][0]

    async def test_shutdown_is_logged(self):
        app = FastAPI()

        with (
            patch("notes_backend.server.main.init_db", new_callable=AsyncMock),
            patch("notes_backend.server.main.logger") as mock_logger,
        ):
            async with lifespan(app):
                mock_logger.info.reset_mock()

        assert "Shutting down" in mock_logger.info.call_args[0][0]


class TestInitDb:
    async def test_init_db_creates_users_table(self):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        with patch("notes_backend.core.database.session.engine", engine):
            await init_db()

        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        await engine.dispose()

        assert "users" in tables
