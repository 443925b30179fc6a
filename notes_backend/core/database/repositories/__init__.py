"""
Repositories organized by table.

Each repository wraps one ``AsyncSession`` and exposes the data access
operations of a single entity.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .users import UserRepository

__all__ = ["AsyncBaseRepository", "QueryBuilder", "UserRepository"]
