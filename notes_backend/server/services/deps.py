"""
Service Dependencies.

FastAPI dependencies that wire the request's database session into the
repositories and services, resolve the logged-in user from the ``token``
cookie or a Bearer header, and guard routes by role.
"""

from functools import lru_cache
from typing import Annotated, Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from notes_backend.core.database import get_session
from notes_backend.core.database.entities.users import User
from notes_backend.core.database.repositories.users import UserRepository
from notes_backend.core.errors import ErrorMessage, SecurityError
from notes_backend.core.logging_config import get_logger
from notes_backend.core.mail import Mailer, build_mailer
from notes_backend.core.models.domain import UserRole
from notes_backend.core.security import decode_token
from notes_backend.server.core.config import settings
from notes_backend.server.core.constant import TOKEN_COOKIE_NAME
from notes_backend.server.exception_handlers.http_errors import HttpError

from .auth import AuthService
from .users import UserService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]


@lru_cache
def get_mailer() -> Mailer:
    """Process-wide mail transport selected by ``MAIL__BACKEND``."""
    return build_mailer(settings.mail)


MailerDep = Annotated[Mailer, Depends(get_mailer)]


def get_auth_service(repository: UserRepositoryDep, mailer: MailerDep) -> AuthService:
    return AuthService(repository, mailer)


def get_user_service(repository: UserRepositoryDep) -> UserService:
    return UserService(repository)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


async def get_current_user(
    request: Request,
    repository: UserRepositoryDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> User:
    """
    Resolve the logged-in user.

    The token is read from the ``token`` cookie first, then from the
    ``Authorization: Bearer`` header.

    Raises:
        HttpError: 401 when no token is sent, the token is invalid, or its
            user no longer exists
    """
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise HttpError.unauthorized(ErrorMessage.TOKEN_NOT_PROVIDED.render())

    try:
        user_id = decode_token(token, settings.jwt_secret)
    except SecurityError:
        raise HttpError.unauthorized(ErrorMessage.INVALID_TOKEN.render())

    user = await repository.get_user(user_id=user_id)
    if user is None:
        logger.debug(f"Token subject {user_id} has no user")
        raise HttpError.unauthorized(ErrorMessage.USER_NO_LONGER_EXIST.render())
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable:
    """Build a dependency that admits only users holding one of ``roles``."""

    async def role_guard(user: CurrentUserDep) -> User:
        if user.role not in roles:
            raise HttpError.forbidden(ErrorMessage.PERMISSION_DENIED.render())
        return user

    return role_guard


AdminUserDep = Annotated[User, Depends(require_roles(UserRole.admin))]
