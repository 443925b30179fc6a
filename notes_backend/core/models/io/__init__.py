"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- users: registration, login, password and profile I/O models
"""

from .users import (
    FilterUser,
    ForgotPasswordRequestDto,
    LoginUserDto,
    NameUpdateDto,
    RegisterUserDto,
    ResetPasswordRequestDto,
    Response,
    RoleUpdateDto,
    UserData,
    UserListResponseDto,
    UserLoginResponseDto,
    UserPasswordUpdateDto,
    UserResponseDto,
)

__all__ = [
    "FilterUser",
    "ForgotPasswordRequestDto",
    "LoginUserDto",
    "NameUpdateDto",
    "RegisterUserDto",
    "ResetPasswordRequestDto",
    "Response",
    "RoleUpdateDto",
    "UserData",
    "UserListResponseDto",
    "UserLoginResponseDto",
    "UserPasswordUpdateDto",
    "UserResponseDto",
]
