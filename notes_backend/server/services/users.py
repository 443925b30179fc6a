"""
User Service.

Profile maintenance for the logged-in user and user administration for
admins.
"""

from __future__ import annotations

from typing import List, Tuple
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from notes_backend.core.database.entities.users import User
from notes_backend.core.database.repositories.users import UserRepository
from notes_backend.core.errors import SecurityError
from notes_backend.core.logging_config import get_logger
from notes_backend.core.models.domain import UserRole
from notes_backend.core.models.io.users import UserPasswordUpdateDto
from notes_backend.core.security import verify_password
from notes_backend.server.exception_handlers.http_errors import HttpError

from .auth import hash_password_async

logger = get_logger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"
OLD_PASSWORD_MESSAGE = "Old password is incorrect"


class UserService:
    """User profile and administration operations over a ``UserRepository``."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def list_users(self, page: int, limit: int) -> Tuple[List[User], int]:
        users = await self.repository.get_users(page, limit)
        total = await self.repository.get_user_count()
        return users, total

    async def update_name(self, user: User, name: str) -> User:
        try:
            return await self.repository.update_user_name(user.id, name)
        except LookupError:
            raise HttpError.not_found(USER_NOT_FOUND_MESSAGE)

    async def update_role(self, user_id: UUID, role: UserRole) -> User:
        try:
            updated = await self.repository.update_user_role(user_id, role)
        except LookupError:
            raise HttpError.not_found(USER_NOT_FOUND_MESSAGE)
        logger.info(f"Role of user {user_id} set to {role.value}")
        return updated

    async def update_password(self, user: User, dto: UserPasswordUpdateDto) -> None:
        """
        Change the password after checking the current one.

        Raises:
            HttpError: 400 when the old password does not match
        """
        try:
            matches = await run_in_threadpool(verify_password, dto.old_password, user.password)
        except SecurityError as e:
            raise HttpError.bad_request(e.message) from e
        if not matches:
            raise HttpError.bad_request(OLD_PASSWORD_MESSAGE)

        hashed = await hash_password_async(dto.password)
        try:
            await self.repository.update_user_password(user.id, hashed)
        except LookupError:
            raise HttpError.not_found(USER_NOT_FOUND_MESSAGE)
