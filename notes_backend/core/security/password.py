"""
Password hashing.

Passwords are hashed with argon2id and stored as PHC strings
(``$argon2id$v=19$m=...,t=...,p=...$<salt>$<hash>``). Every hash gets its own
random salt, so hashing the same password twice yields different strings that
both verify.
"""

import logging

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from notes_backend.core.errors import ErrorMessage, SecurityError

logger = logging.getLogger(__name__)

MAX_PASSWORD_LENGTH = 128

_hasher = PasswordHasher()


def _check_password(password: str) -> None:
    if not password:
        raise SecurityError(ErrorMessage.EMPTY_PASSWORD)
    if len(password) > MAX_PASSWORD_LENGTH:
        raise SecurityError(ErrorMessage.EXCEEDED_MAX_PASSWORD_LENGTH, length=MAX_PASSWORD_LENGTH)


def hash_password(password: str) -> str:
    """
    Hash a plaintext password.

    Args:
        password: Plaintext password, 1 to MAX_PASSWORD_LENGTH characters

    Returns:
        The argon2id PHC string

    Raises:
        SecurityError: EMPTY_PASSWORD, EXCEEDED_MAX_PASSWORD_LENGTH or HASHING_ERROR
    """
    _check_password(password)
    try:
        return _hasher.hash(password)
    except HashingError as e:
        logger.error(f"Password hashing failed: {e}")
        raise SecurityError(ErrorMessage.HASHING_ERROR) from e


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Args:
        password: Plaintext password to check
        hashed: Stored argon2 PHC string

    Returns:
        True when the password matches, False otherwise

    Raises:
        SecurityError: EMPTY_PASSWORD, EXCEEDED_MAX_PASSWORD_LENGTH or INVALID_HASH_FORMAT
    """
    _check_password(password)
    try:
        return _hasher.verify(hashed, password)
    except InvalidHashError as e:
        raise SecurityError(ErrorMessage.INVALID_HASH_FORMAT) from e
    except VerificationError:
        return False


def password_needs_rehash(hashed: str) -> bool:
    """Whether ``hashed`` was produced with parameters other than the current ones."""
    try:
        return _hasher.check_needs_rehash(hashed)
    except (InvalidHashError, ValueError) as e:
        raise SecurityError(ErrorMessage.INVALID_HASH_FORMAT) from e
