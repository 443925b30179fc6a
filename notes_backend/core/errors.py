"""
Domain error messages and exceptions.

``ErrorMessage`` holds every user-facing error text the backend returns from
its security layer and auth checks; ``SecurityError`` carries one of them out
of the password and token helpers.
"""

from enum import Enum


class ErrorMessage(str, Enum):
    """User-facing error texts."""

    EMPTY_PASSWORD = "Password is required"
    EXCEEDED_MAX_PASSWORD_LENGTH = "Max password length is {length}"
    HASHING_ERROR = "Hashing error"
    INVALID_HASH_FORMAT = "Invalid hash format"
    INVALID_TOKEN = "Invalid token"
    SERVER_ERROR = "Server error"
    WRONG_CREDENTIALS = "Wrong credentials provided"
    EMAIL_EXISTS = "Email already exists"
    USER_NO_LONGER_EXIST = "User no longer exist"
    TOKEN_NOT_PROVIDED = "You are not logged in, please provide token"
    PERMISSION_DENIED = "Permission denied"
    USER_NOT_AUTHENTICATED = "User not authenticated"

    def render(self, **params) -> str:
        """Return the message text with its placeholders filled in."""
        return self.value.format(**params) if params else self.value

    def __str__(self) -> str:
        return self.value


class SecurityError(Exception):
    """Raised by the password and token helpers."""

    def __init__(self, error: ErrorMessage, **params) -> None:
        self.error = error
        self.message = error.render(**params)
        super().__init__(self.message)
