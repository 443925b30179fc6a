from __future__ import annotations

from typing import AsyncGenerator, Callable, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from notes_backend.core.database import get_session
from notes_backend.core.database.base import utc_now_naive
from notes_backend.core.database.entities.users import User
from notes_backend.core.database.utils import create_all, create_sessionmaker
from notes_backend.core.mail import OutgoingMail
from notes_backend.core.models.domain import UserRole
from notes_backend.core.security import create_token, hash_password
from notes_backend.server.core.config import settings
from notes_backend.server.main import app
from notes_backend.server.services.deps import get_mailer

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "password123"


class RecordingMailer:
    """Mail transport that keeps every message for assertions."""

    def __init__(self) -> None:
        self.sent: List[OutgoingMail] = []

    async def send(self, mail: OutgoingMail) -> None:
        self.sent.append(mail)


@pytest.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(test_engine)


@pytest.fixture(name="session")
async def session_fixture(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting rows outside of requests."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture(name="client")
async def client_fixture(session_maker, mailer: RecordingMailer) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with the test database and recording mailer wired in."""

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_mailer] = lambda: mailer

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: AsyncSession) -> Callable:
    """Insert a user directly; returns the persisted entity."""

    async def _make_user(
        email: str = "alice@example.com",
        name: str = "Alice",
        password: str = DEFAULT_PASSWORD,
        role: UserRole = UserRole.user,
        verified: bool = True,
        token: Optional[str] = None,
        token_expires_at=None,
        created_at=None,
    ) -> User:
        created = created_at or utc_now_naive()
        user = User(
            name=name,
            email=email,
            password=hash_password(password),
            role=role,
            verified=verified,
            verification_token=token,
            token_expires_at=token_expires_at,
            created_at=created,
            updated_at=created,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers() -> Callable:
    """Build a Bearer header carrying a valid access token for a user."""

    def _auth_headers(user: User) -> dict:
        token = create_token(str(user.id), settings.jwt_secret, settings.jwt_maxage)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
