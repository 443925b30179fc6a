"""
Tests for the authentication endpoints.

Covers registration, login, e-mail verification, the forgot/reset password
flow and logout against an in-memory database with a recording mailer.
"""

from datetime import timedelta
from urllib.parse import parse_qs, urlparse

import pytest
from httpx import AsyncClient
from sqlmodel import select

from notes_backend.core.database.base import utc_now_naive
from notes_backend.core.database.entities.users import User
from notes_backend.core.security import decode_token, verify_password
from notes_backend.server.core.config import settings

pytestmark = pytest.mark.asyncio

REGISTER_BODY = {
    "name": "Alice",
    "email": "alice@example.com",
    "password": "password123",
    "confirm_password": "password123",
}


def _token_from_url(url: str) -> str:
    return parse_qs(urlparse(url).query)["token"][0]


async def _load_user(session, email: str) -> User:
    result = await session.execute(select(User).where(User.email == email).execution_options(populate_existing=True))
    return result.scalars().one()


class TestRegister:
    async def test_register_success(self, client: AsyncClient, session, mailer):
        response = await client.post("/api/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 201
        assert response.json() == {
            "status": "success",
            "message": "Registration successful! Please check your email to verify your account.",
        }

        user = await _load_user(session, "alice@example.com")
        assert user.verified is False
        assert user.password != "password123"
        assert verify_password("password123", user.password)
        assert user.verification_token is not None
        remaining = user.token_expires_at - utc_now_naive()
        assert timedelta(hours=23) < remaining <= timedelta(hours=24)

        assert len(mailer.sent) == 1
        mail = mailer.sent[0]
        assert mail.to == "alice@example.com"
        assert f"{settings.api_url}/api/v1/auth/verify?token={user.verification_token}" in mail.text_body

    async def test_register_duplicate_email(self, client: AsyncClient, make_user):
        await make_user(email="alice@example.com")

        response = await client.post("/api/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 409
        assert response.json() == {"status": "fail", "message": "Email already exists"}

    async def test_register_password_mismatch(self, client: AsyncClient, mailer):
        body = {**REGISTER_BODY, "confirm_password": "password999"}

        response = await client.post("/api/v1/auth/register", json=body)

        assert response.status_code == 400
        assert response.json()["status"] == "fail"
        assert "Passwords do not match" in response.json()["message"]
        assert mailer.sent == []

    async def test_register_invalid_fields(self, client: AsyncClient):
        body = {**REGISTER_BODY, "email": "nope", "password": "short", "confirm_password": "short"}

        response = await client.post("/api/v1/auth/register", json=body)

        assert response.status_code == 400
        message = response.json()["message"]
        assert "email: Email is invalid" in message
        assert "password: Password must contain 8 characters" in message

    async def test_register_missing_field(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/register", json={"name": "Alice"})

        assert response.status_code == 400
        assert "email:" in response.json()["message"]

    async def test_register_too_long_password(self, client: AsyncClient):
        long_password = "a" * 129
        body = {**REGISTER_BODY, "password": long_password, "confirm_password": long_password}

        response = await client.post("/api/v1/auth/register", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "Max password length is 128"

    async def test_register_succeeds_when_mail_fails(self, client: AsyncClient, session, mailer):
        async def broken_send(mail):
            raise ConnectionError("smtp down")

        mailer.send = broken_send

        response = await client.post("/api/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 201
        assert (await _load_user(session, "alice@example.com")) is not None


class TestLogin:
    async def test_login_success(self, client: AsyncClient, make_user):
        user = await make_user()

        response = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "password123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert decode_token(body["token"], settings.jwt_secret) == str(user.id)

        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"token={body['token']}")
        assert "HttpOnly" in cookie
        assert "Path=/" in cookie
        assert f"Max-Age={settings.jwt_maxage * 60}" in cookie

    async def test_login_unverified_user_allowed(self, client: AsyncClient, make_user):
        await make_user(verified=False)

        response = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "password123"}
        )

        assert response.status_code == 200

    async def test_wrong_password_and_unknown_email_look_the_same(self, client: AsyncClient, make_user):
        await make_user()

        wrong_password = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "password124"}
        )
        unknown_email = await client.post(
            "/api/v1/auth/login", json={"email": "bob@example.com", "password": "password123"}
        )

        expected = {"status": "fail", "message": "Wrong credentials provided"}
        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json() == unknown_email.json() == expected
        assert "set-cookie" not in wrong_password.headers

    async def test_login_with_corrupt_hash(self, client: AsyncClient, session, make_user):
        user = await make_user()
        user.password = "corrupt"
        await session.commit()

        response = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "password123"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Wrong credentials provided"


class TestVerifyEmail:
    async def test_verify_success(self, client: AsyncClient, session, make_user, mailer):
        user = await make_user(verified=False, token="verify-me", token_expires_at=utc_now_naive() + timedelta(hours=1))

        response = await client.get("/api/v1/auth/verify", params={"token": "verify-me"})

        assert response.status_code == 303
        assert response.headers["location"] == settings.frontend_url
        cookie = response.headers["set-cookie"]
        token = cookie.split(";")[0].split("=", 1)[1]
        assert decode_token(token, settings.jwt_secret) == str(user.id)

        user = await _load_user(session, "alice@example.com")
        assert user.verified is True
        assert user.verification_token is None
        assert user.token_expires_at is None

        assert [m.subject for m in mailer.sent] == ["Welcome to Notes"]

    async def test_verify_expired_token(self, client: AsyncClient, session, make_user, mailer):
        await make_user(verified=False, token="old", token_expires_at=utc_now_naive() - timedelta(minutes=1))

        response = await client.get("/api/v1/auth/verify", params={"token": "old"})

        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Verification token has expired"}
        user = await _load_user(session, "alice@example.com")
        assert user.verified is False
        assert mailer.sent == []

    async def test_verify_unknown_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/verify", params={"token": "nope"})

        assert response.status_code == 401
        assert response.json() == {"status": "fail", "message": "Invalid token"}

    async def test_verify_token_is_single_use(self, client: AsyncClient, make_user):
        await make_user(verified=False, token="once", token_expires_at=utc_now_naive() + timedelta(hours=1))

        first = await client.get("/api/v1/auth/verify", params={"token": "once"})
        second = await client.get("/api/v1/auth/verify", params={"token": "once"})

        assert first.status_code == 303
        assert second.status_code == 401

    async def test_verify_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/verify")
        assert response.status_code == 400


class TestPasswordReset:
    async def test_forgot_password_sends_reset_link(self, client: AsyncClient, session, make_user, mailer):
        await make_user()

        response = await client.post("/api/v1/auth/forgot-password", json={"email": "alice@example.com"})

        assert response.status_code == 200
        assert response.json()["status"] == "success"

        user = await _load_user(session, "alice@example.com")
        remaining = user.token_expires_at - utc_now_naive()
        assert timedelta(minutes=29) < remaining <= timedelta(minutes=30)

        assert len(mailer.sent) == 1
        assert f"{settings.frontend_url}/reset-password?token={user.verification_token}" in mailer.sent[0].text_body

    async def test_forgot_password_unknown_email(self, client: AsyncClient, mailer):
        response = await client.post("/api/v1/auth/forgot-password", json={"email": "ghost@example.com"})

        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Email not found!"}
        assert mailer.sent == []

    async def test_full_reset_flow(self, client: AsyncClient, session, make_user, mailer):
        await make_user()
        await client.post("/api/v1/auth/forgot-password", json={"email": "alice@example.com"})
        reset_url = next(line for line in mailer.sent[0].text_body.splitlines() if "reset-password" in line)
        token = _token_from_url(reset_url.strip())

        response = await client.post(
            "/api/v1/auth/reset-password",
            json={"token": token, "password": "new-password", "confirm_password": "new-password"},
        )

        assert response.status_code == 200
        user = await _load_user(session, "alice@example.com")
        assert user.verification_token is None
        assert verify_password("new-password", user.password)

        old_login = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "password123"}
        )
        new_login = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "new-password"}
        )
        assert old_login.status_code == 400
        assert new_login.status_code == 200

    async def test_reset_unknown_token(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/reset-password",
            json={"token": "nope", "password": "new-password", "confirm_password": "new-password"},
        )

        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Invalid or expired token"}

    async def test_reset_expired_token(self, client: AsyncClient, session, make_user):
        await make_user(token="stale", token_expires_at=utc_now_naive() - timedelta(minutes=1))

        response = await client.post(
            "/api/v1/auth/reset-password",
            json={"token": "stale", "password": "new-password", "confirm_password": "new-password"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Verification token has expired"
        user = await _load_user(session, "alice@example.com")
        assert verify_password("password123", user.password)


async def test_logout_clears_cookie(client: AsyncClient):
    response = await client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    cookie = response.headers["set-cookie"]
    assert cookie.startswith('token=""') or cookie.startswith("token=;")
    assert "Max-Age=0" in cookie
