"""
Access tokens.

HS256-signed JWTs carrying the user id in ``sub`` with ``iat`` and ``exp``
claims.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from notes_backend.core.errors import ErrorMessage, SecurityError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_token(subject: str, secret: str, expires_in_minutes: int) -> str:
    """
    Issue a signed access token.

    Args:
        subject: Token subject, the user id
        secret: HMAC signing secret
        expires_in_minutes: Token lifetime

    Returns:
        The encoded JWT

    Raises:
        SecurityError: INVALID_TOKEN when the subject is empty
    """
    if not subject:
        raise SecurityError(ErrorMessage.INVALID_TOKEN)

    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_in_minutes)).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> str:
    """
    Verify a token and return its subject.

    Raises:
        SecurityError: INVALID_TOKEN when the token is malformed, tampered,
            expired or has no subject
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.debug(f"JWT validation failed: {e}")
        raise SecurityError(ErrorMessage.INVALID_TOKEN) from e

    subject = payload.get("sub")
    if not subject:
        logger.debug("JWT token missing 'sub' claim")
        raise SecurityError(ErrorMessage.INVALID_TOKEN)
    return subject
