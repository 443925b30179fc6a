"""Domain enums shared between persistence, services and the API."""

from .enums import UserRole

__all__ = ["UserRole"]
