"""
Service layer: business rules and FastAPI dependencies.
"""

from .auth import AuthService
from .users import UserService

__all__ = ["AuthService", "UserService"]
