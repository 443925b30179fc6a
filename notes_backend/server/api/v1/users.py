"""
User Endpoints.

Profile maintenance for the logged-in user and user administration for
admins. Every route requires a valid access token.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from notes_backend.core.logging_config import get_logger
from notes_backend.core.models.io.users import (
    FilterUser,
    NameUpdateDto,
    Response,
    RoleUpdateDto,
    UserData,
    UserListResponseDto,
    UserPasswordUpdateDto,
    UserResponseDto,
)
from notes_backend.server.services.deps import AdminUserDep, CurrentUserDep, UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])

# Offsets must fit the database integer type
MAX_PAGE = 2**31 - 1


def _user_response(user) -> UserResponseDto:
    return UserResponseDto(data=UserData(user=FilterUser.model_validate(user)))


@router.get(
    "/me",
    response_model=UserResponseDto,
    summary="Current User",
    description="Return the account of the logged-in user.",
    responses={401: {"description": "Not logged in or invalid token"}},
)
async def get_me(user: CurrentUserDep) -> UserResponseDto:
    return _user_response(user)


@router.get(
    "",
    response_model=UserListResponseDto,
    summary="List Users",
    description="Page through all accounts, newest first. Admin only.",
    responses={
        401: {"description": "Not logged in or invalid token"},
        403: {"description": "Permission denied"},
    },
)
async def list_users(
    admin: AdminUserDep,
    service: UserServiceDep,
    page: Annotated[int, Query(ge=1, le=MAX_PAGE, description="1-based page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=50, description="Page size")] = 10,
) -> UserListResponseDto:
    users, total = await service.list_users(page, limit)
    return UserListResponseDto(users=FilterUser.filter_users(users), results=total)


@router.put(
    "/me/name",
    response_model=UserResponseDto,
    summary="Rename Current User",
    description="Change the display name of the logged-in user.",
)
async def update_name(body: NameUpdateDto, user: CurrentUserDep, service: UserServiceDep) -> UserResponseDto:
    updated = await service.update_name(user, body.name)
    return _user_response(updated)


@router.put(
    "/me/password",
    response_model=Response,
    summary="Change Password",
    description="Change the password of the logged-in user after checking the current one.",
    responses={400: {"description": "Old password is incorrect or invalid new password"}},
)
async def update_password(body: UserPasswordUpdateDto, user: CurrentUserDep, service: UserServiceDep) -> Response:
    await service.update_password(user, body)
    return Response(message="Password updated Successfully")


@router.put(
    "/{user_id}/role",
    response_model=UserResponseDto,
    summary="Change User Role",
    description="Grant or revoke the admin role of an account. Admin only.",
    responses={
        403: {"description": "Permission denied"},
        404: {"description": "User not found"},
    },
)
async def update_role(
    user_id: UUID, body: RoleUpdateDto, admin: AdminUserDep, service: UserServiceDep
) -> UserResponseDto:
    updated = await service.update_role(user_id, body.role)
    logger.info(f"Admin {admin.id} changed role of {user_id} to {body.role.value}")
    return _user_response(updated)
