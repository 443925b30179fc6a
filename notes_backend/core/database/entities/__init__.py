"""
Database entities organized by table.

Importing this package registers every table on ``Base.metadata``.
"""

from .users import User, UserRole

__all__ = ["User", "UserRole"]
