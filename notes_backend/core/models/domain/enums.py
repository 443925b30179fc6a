"""Domain enums for user accounts."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """
    Role of a user account.

    Admins may list users and change roles; every other route only needs a
    logged-in user.
    """

    admin = "admin"
    user = "user"
