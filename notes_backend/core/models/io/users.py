"""
User I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the auth and user
endpoints. Request models validate their fields with the messages the
frontend shows verbatim; response models never expose the password hash.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    WrapValidator,
    field_validator,
    model_validator,
)

from notes_backend.core.models.domain import UserRole

MIN_PASSWORD_LENGTH = 8
MAX_NAME_LENGTH = 100


def _require(value: str, message: str) -> str:
    if not value or not value.strip():
        raise ValueError(message)
    return value


def _check_email(value, handler):
    if isinstance(value, str):
        _require(value, "Email is required")
    try:
        return handler(value)
    except ValidationError:
        raise ValueError("Email is invalid")


# EmailStr normalizes the address; the wrapper keeps the user-facing messages
UserEmail = Annotated[EmailStr, WrapValidator(_check_email)]


def _check_password(value: str, message: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(message)
    return value


def _check_name(value: str) -> str:
    value = _require(value, "Name is required").strip()
    if len(value) > MAX_NAME_LENGTH:
        raise ValueError(f"Name must be at most {MAX_NAME_LENGTH} characters")
    return value


# =====================================================================
# Requests
# =====================================================================


class RegisterUserDto(BaseModel):
    """Schema for registering a new account."""

    name: str = Field(description="Display name")
    email: UserEmail = Field(description="Login e-mail address")
    password: str = Field(description="Plaintext password")
    confirm_password: str = Field(description="Repeat of the password")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value, "Password must contain 8 characters")

    @field_validator("confirm_password")
    @classmethod
    def check_confirm_password(cls, value: str) -> str:
        return _check_password(value, "Password confirmation must contain 8 characters")

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterUserDto":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginUserDto(BaseModel):
    """Schema for logging in with e-mail and password."""

    email: UserEmail
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value, "Password must contain 8 characters")


class NameUpdateDto(BaseModel):
    """Schema for renaming the current user."""

    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check_name(value)


class RoleUpdateDto(BaseModel):
    """Schema for changing a user's role."""

    role: UserRole


class UserPasswordUpdateDto(BaseModel):
    """Schema for changing the current user's password."""

    password: str
    confirm_password: str
    old_password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value, "Password must contain 8 characters")

    @field_validator("confirm_password")
    @classmethod
    def check_confirm_password(cls, value: str) -> str:
        return _check_password(value, "Password confirm must contain 8 characters")

    @field_validator("old_password")
    @classmethod
    def check_old_password(cls, value: str) -> str:
        return _check_password(value, "Old password must contain 8 characters")

    @model_validator(mode="after")
    def passwords_match(self) -> "UserPasswordUpdateDto":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ForgotPasswordRequestDto(BaseModel):
    """Schema for requesting a password reset mail."""

    email: UserEmail


class ResetPasswordRequestDto(BaseModel):
    """Schema for setting a new password with a reset token."""

    token: str
    password: str
    confirm_password: str

    @field_validator("token")
    @classmethod
    def check_token(cls, value: str) -> str:
        return _require(value, "Token is required")

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value, "Password must contain 8 characters")

    @field_validator("confirm_password")
    @classmethod
    def check_confirm_password(cls, value: str) -> str:
        return _check_password(value, "Password confirm must contain 8 characters")

    @model_validator(mode="after")
    def passwords_match(self) -> "ResetPasswordRequestDto":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


# =====================================================================
# Responses
# =====================================================================


class FilterUser(BaseModel):
    """Public view of a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: UserRole
    verified: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def filter_users(cls, users) -> List["FilterUser"]:
        return [cls.model_validate(user) for user in users]


class UserData(BaseModel):
    user: FilterUser


class UserResponseDto(BaseModel):
    status: str = "success"
    data: UserData


class UserListResponseDto(BaseModel):
    status: str = "success"
    users: List[FilterUser]
    results: int


class UserLoginResponseDto(BaseModel):
    status: str = "success"
    token: str


class Response(BaseModel):
    status: str = "success"
    message: str
