"""
Authentication Endpoints.

Registration, login, e-mail verification, password reset and logout. Login
and verification hand the access token to the browser as the HTTP-only
``token`` cookie; login also returns it in the body for non-browser clients.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi import Response as HTTPResponse
from fastapi.responses import RedirectResponse

from notes_backend.core.logging_config import get_logger
from notes_backend.core.models.io.users import (
    ForgotPasswordRequestDto,
    LoginUserDto,
    RegisterUserDto,
    ResetPasswordRequestDto,
    Response,
    UserLoginResponseDto,
)
from notes_backend.server.core.config import settings
from notes_backend.server.core.constant import TOKEN_COOKIE_NAME
from notes_backend.server.services.auth import REGISTRATION_MESSAGE
from notes_backend.server.services.deps import AuthServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


def set_token_cookie(response: HTTPResponse, token: str) -> None:
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.token_cookie_max_age,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post(
    "/register",
    response_model=Response,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an unverified account and mail a verification link to its address.",
    responses={
        201: {"description": "Account created, verification mail sent"},
        400: {"description": "Invalid registration data"},
        409: {"description": "Email already exists"},
    },
)
async def register(body: RegisterUserDto, service: AuthServiceDep) -> Response:
    await service.register(body)
    return Response(message=REGISTRATION_MESSAGE)


@router.post(
    "/login",
    response_model=UserLoginResponseDto,
    summary="Login",
    description="Exchange e-mail and password for an access token, also set as the `token` cookie.",
    responses={400: {"description": "Wrong credentials provided"}},
)
async def login(body: LoginUserDto, response: HTTPResponse, service: AuthServiceDep) -> UserLoginResponseDto:
    token = await service.login(body)
    set_token_cookie(response, token)
    return UserLoginResponseDto(token=token)


@router.get(
    "/verify",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Verify E-mail",
    description="Consume the mailed verification token, log the user in and redirect to the frontend.",
    responses={
        303: {"description": "Verified; redirect to the frontend with the `token` cookie set"},
        400: {"description": "Verification token has expired"},
        401: {"description": "Invalid token"},
    },
)
async def verify_email(
    token: Annotated[str, Query(min_length=1, description="Verification token from the mail")],
    service: AuthServiceDep,
) -> RedirectResponse:
    user, access_token = await service.verify_email(token)
    logger.info(f"User {user.id} verified their e-mail")
    redirect = RedirectResponse(url=settings.frontend_url, status_code=status.HTTP_303_SEE_OTHER)
    set_token_cookie(redirect, access_token)
    return redirect


@router.post(
    "/forgot-password",
    response_model=Response,
    summary="Forgot Password",
    description="Mail a password reset link to the account's address.",
    responses={400: {"description": "Email not found!"}},
)
async def forgot_password(body: ForgotPasswordRequestDto, service: AuthServiceDep) -> Response:
    await service.forgot_password(body.email)
    return Response(message="Password reset link has been sent to your email.")


@router.post(
    "/reset-password",
    response_model=Response,
    summary="Reset Password",
    description="Set a new password using the token from the reset mail.",
    responses={400: {"description": "Invalid or expired token"}},
)
async def reset_password(body: ResetPasswordRequestDto, service: AuthServiceDep) -> Response:
    await service.reset_password(body)
    return Response(message="Password has been successfully reset.")


@router.post(
    "/logout",
    response_model=Response,
    summary="Logout",
    description="Clear the `token` cookie.",
)
async def logout(response: HTTPResponse) -> Response:
    response.delete_cookie(key=TOKEN_COOKIE_NAME, path="/", httponly=True, secure=settings.cookie_secure, samesite="lax")
    return Response(message="Logged out successfully")
