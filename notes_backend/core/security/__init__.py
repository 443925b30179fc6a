"""
Security primitives: password hashing and access tokens.
"""

from .password import MAX_PASSWORD_LENGTH, hash_password, password_needs_rehash, verify_password
from .token import create_token, decode_token

__all__ = [
    "MAX_PASSWORD_LENGTH",
    "create_token",
    "decode_token",
    "hash_password",
    "password_needs_rehash",
    "verify_password",
]
