"""
User repository interface and implementation.

This module provides data access operations for user accounts: lookups by
id, name, e-mail or pending token, paginated listing, account creation and
the profile, role, password and token updates the auth flows need.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from notes_backend.core.models.domain import UserRole

from ..base import utc_now_naive
from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder

logger = logging.getLogger(__name__)

def _as_uuid(value: uuid.UUID | str) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None

class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session for database operations
        """
        super().__init__(session, User)

    # =====================================================================
    # Generic CRUD
    # =====================================================================

    def ordering(self):
        return (User.created_at.desc(),)

    async def create(self, user: User) -> User:
        """Persist a new user.

        Raises:
            IntegrityError: when the e-mail is already taken; the session is
                rolled back before the error propagates
        """
        return await self._persist(user)

    async def get_by_id(self, user_id: uuid.UUID | str) -> Optional[User]:
        user_uuid = _as_uuid(user_id)
        if user_uuid is None:
            return None
        return await super().get_by_id(user_uuid)

    async def update(self, user: User) -> User:
        user.updated_at = utc_now_naive()
        return await self._persist(user)

    # =====================================================================
    # Account operations
    # =====================================================================

    async def get_user(
        self,
        user_id: Optional[uuid.UUID | str] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Optional[User]:
        """Get the first user matching every given filter.

        Args:
            user_id: User primary key
            name: Display name
            email: Login e-mail
            token: Pending verification or reset token

        Returns:
            User instance or None
        """
        filters: Dict[str, Any] = {"name": name, "email": email, "verification_token": token}
        if user_id is not None:
            user_uuid = _as_uuid(user_id)
            if user_uuid is None:
                return None
            filters["id"] = user_uuid

        stmt = QueryBuilder.apply_filters(select(User), User, filters).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_users(self, page: int, limit: int) -> List[User]:
        """Get one page of users ordered by creation time, newest first.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            List of User instances
        """
        return await self.list(limit=limit, offset=QueryBuilder.page_offset(page, limit))

    async def get_user_count(self) -> int:
        return await self.count()

    async def save_user(
        self,
        name: str,
        email: str,
        password: str,
        verification_token: str,
        token_expires_at: datetime,
    ) -> User:
        """Create an unverified user holding a pending verification token.

        Raises:
            IntegrityError: when the e-mail is already taken
        """
        now = utc_now_naive()
        user = User(
            name=name,
            email=email,
            password=password,
            verification_token=verification_token,
            token_expires_at=token_expires_at,
            created_at=now,
            updated_at=now,
        )
        user = await self.create(user)
        logger.debug(f"Saved user {user.id}")
        return user

    async def _require(self, user_id: uuid.UUID | str) -> User:
        user = await self.get_by_id(user_id)
        if user is None:
            raise LookupError(f"User {user_id} not found")
        return user

    async def update_user_name(self, user_id: uuid.UUID | str, name: str) -> User:
        user = await self._require(user_id)
        user.name = name
        return await self.update(user)

    async def update_user_role(self, user_id: uuid.UUID | str, role: UserRole) -> User:
        user = await self._require(user_id)
        user.role = role
        return await self.update(user)

    async def update_user_password(self, user_id: uuid.UUID | str, password: str) -> User:
        """Store a new password hash.

        Args:
            user_id: User primary key
            password: The already hashed password

        Raises:
            LookupError: when the user does not exist
        """
        user = await self._require(user_id)
        user.password = password
        return await self.update(user)

    async def verified_token(self, token: str) -> Optional[User]:
        """Mark the owner of ``token`` verified and clear the token.

        Returns:
            The verified user, or None when no user holds the token
        """
        user = await self.get_user(token=token)
        if user is None:
            return None
        user.verified = True
        user.verification_token = None
        user.token_expires_at = None
        return await self.update(user)

    async def add_verified_token(self, user_id: uuid.UUID | str, token: str, expires_at: datetime) -> User:
        """Store a fresh pending token, replacing any previous one.

        Raises:
            LookupError: when the user does not exist
        """
        user = await self._require(user_id)
        user.verification_token = token
        user.token_expires_at = expires_at
        return await self.update(user)

    async def clear_token(self, user_id: uuid.UUID | str) -> User:
        """Drop the pending token without touching the verification state."""
        user = await self._require(user_id)
        user.verification_token = None
        user.token_expires_at = None
        return await self.update(user)
