"""
Authentication Service.

Business rules of the account lifecycle: registration with e-mail
verification, password login, verification of the mailed token, and the
forgot/reset password flow. Every expected failure is raised as an
``HttpError``; outgoing mail failures are logged and never fail the request.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from notes_backend.core.database.base import utc_now_naive
from notes_backend.core.database.entities.users import User
from notes_backend.core.database.repositories.users import UserRepository
from notes_backend.core.errors import ErrorMessage, SecurityError
from notes_backend.core.logging_config import get_logger
from notes_backend.core.mail import Mailer, OutgoingMail, reset_password_email, verification_email, welcome_email
from notes_backend.core.models.io.users import (
    LoginUserDto,
    RegisterUserDto,
    ResetPasswordRequestDto,
)
from notes_backend.core.monitoring import log_auth_event
from notes_backend.core.security import create_token, hash_password, password_needs_rehash, verify_password
from notes_backend.server.core.config import Settings, settings
from notes_backend.server.core.constant import API_V1_STR
from notes_backend.server.exception_handlers.http_errors import HttpError

logger = get_logger(__name__)

REGISTRATION_MESSAGE = "Registration successful! Please check your email to verify your account."
EXPIRED_TOKEN_MESSAGE = "Verification token has expired"
EMAIL_NOT_FOUND_MESSAGE = "Email not found!"
INVALID_RESET_TOKEN_MESSAGE = "Invalid or expired token"


def _is_expired(expires_at: Optional[datetime]) -> bool:
    return expires_at is None or expires_at < utc_now_naive()


def _new_token() -> str:
    return str(uuid.uuid4())


async def hash_password_async(password: str) -> str:
    """Hash off the event loop; input errors become 400, hasher failures 500."""
    try:
        return await run_in_threadpool(hash_password, password)
    except SecurityError as e:
        if e.error is ErrorMessage.HASHING_ERROR:
            raise HttpError.server_error(e.message) from e
        raise HttpError.bad_request(e.message) from e


class AuthService:
    """Account lifecycle operations over a ``UserRepository``."""

    def __init__(self, repository: UserRepository, mailer: Mailer, config: Settings = settings) -> None:
        self.repository = repository
        self.mailer = mailer
        self.config = config

    async def _send(self, mail: OutgoingMail) -> None:
        try:
            await self.mailer.send(mail)
        except Exception:
            logger.error(f"Failed to send {mail.subject!r} mail to {mail.to}", exc_info=True)

    def issue_token(self, user: User) -> str:
        return create_token(str(user.id), self.config.jwt_secret, self.config.jwt_maxage)

    async def register(self, dto: RegisterUserDto) -> User:
        """
        Create an unverified account and mail its verification link.

        Raises:
            HttpError: 409 when the e-mail is taken, 400/500 on hashing or
                database failures
        """
        token = _new_token()
        expires_at = utc_now_naive() + timedelta(hours=self.config.verification_token_ttl_hours)
        hashed = await hash_password_async(dto.password)

        try:
            user = await self.repository.save_user(dto.name, dto.email, hashed, token, expires_at)
        except IntegrityError:
            log_auth_event("register", success=False)
            raise HttpError.unique_constraint_violation(ErrorMessage.EMAIL_EXISTS.render())
        except SQLAlchemyError as e:
            logger.error(f"Failed to save user {dto.email}: {e}")
            raise HttpError.server_error(ErrorMessage.SERVER_ERROR.render()) from e

        verify_url = f"{self.config.api_url.rstrip('/')}{API_V1_STR}/auth/verify?token={token}"
        await self._send(
            verification_email(
                user.email,
                user.name,
                verify_url,
                expires_in=f"{self.config.verification_token_ttl_hours} hours",
            )
        )
        log_auth_event("register", user_id=str(user.id))
        logger.info(f"Registered user {user.id}")
        return user

    async def _upgrade_hash(self, user: User, password: str) -> None:
        """Re-hash a verified password whose stored hash uses outdated argon2 parameters."""
        if not password_needs_rehash(user.password):
            return
        try:
            hashed = await run_in_threadpool(hash_password, password)
            await self.repository.update_user_password(user.id, hashed)
        except (SecurityError, SQLAlchemyError, LookupError):
            logger.warning(f"Could not upgrade password hash of user {user.id}", exc_info=True)
            return
        logger.info(f"Upgraded password hash of user {user.id}")

    async def login(self, dto: LoginUserDto) -> str:
        """
        Check credentials and issue an access token.

        Unknown e-mail, unreadable hash and wrong password all fail with the
        same 400 so callers cannot probe for accounts.
        """
        user = await self.repository.get_user(email=dto.email)
        if user is None:
            log_auth_event("login", success=False)
            raise HttpError.bad_request(ErrorMessage.WRONG_CREDENTIALS.render())

        try:
            matches = await run_in_threadpool(verify_password, dto.password, user.password)
        except SecurityError:
            matches = False

        if not matches:
            log_auth_event("login", user_id=str(user.id), success=False)
            raise HttpError.bad_request(ErrorMessage.WRONG_CREDENTIALS.render())

        await self._upgrade_hash(user, dto.password)
        log_auth_event("login", user_id=str(user.id))
        return self.issue_token(user)

    async def verify_email(self, token: str) -> Tuple[User, str]:
        """
        Consume a verification token.

        Returns:
            The verified user and a fresh access token

        Raises:
            HttpError: 401 for an unknown token, 400 for an expired one
        """
        user = await self.repository.get_user(token=token)
        if user is None:
            log_auth_event("verify_email", success=False)
            raise HttpError.unauthorized(ErrorMessage.INVALID_TOKEN.render())

        if _is_expired(user.token_expires_at):
            log_auth_event("verify_email", user_id=str(user.id), success=False)
            raise HttpError.bad_request(EXPIRED_TOKEN_MESSAGE)

        user = await self.repository.verified_token(token)
        if user is None:
            raise HttpError.unauthorized(ErrorMessage.INVALID_TOKEN.render())

        await self._send(welcome_email(user.email, user.name))
        log_auth_event("verify_email", user_id=str(user.id))
        return user, self.issue_token(user)

    async def forgot_password(self, email: str) -> None:
        """Store a reset token on the account and mail the reset link."""
        user = await self.repository.get_user(email=email)
        if user is None:
            log_auth_event("forgot_password", success=False)
            raise HttpError.bad_request(EMAIL_NOT_FOUND_MESSAGE)

        token = _new_token()
        expires_at = utc_now_naive() + timedelta(minutes=self.config.reset_token_ttl_minutes)
        await self.repository.add_verified_token(user.id, token, expires_at)

        reset_url = f"{self.config.frontend_url.rstrip('/')}/reset-password?token={token}"
        await self._send(
            reset_password_email(
                user.email,
                user.name,
                reset_url,
                expires_in=f"{self.config.reset_token_ttl_minutes} minutes",
            )
        )
        log_auth_event("forgot_password", user_id=str(user.id))

    async def reset_password(self, dto: ResetPasswordRequestDto) -> None:
        """Replace the password of the reset token's owner and drop the token."""
        user = await self.repository.get_user(token=dto.token)
        if user is None:
            log_auth_event("reset_password", success=False)
            raise HttpError.bad_request(INVALID_RESET_TOKEN_MESSAGE)

        if _is_expired(user.token_expires_at):
            log_auth_event("reset_password", user_id=str(user.id), success=False)
            raise HttpError.bad_request(EXPIRED_TOKEN_MESSAGE)

        hashed = await hash_password_async(dto.password)
        await self.repository.update_user_password(user.id, hashed)
        await self.repository.clear_token(user.id)
        log_auth_event("reset_password", user_id=str(user.id))
