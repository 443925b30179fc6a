"""
Exception handlers for the notes backend server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .global_handler import setup_exception_handlers
from .http_errors import HttpError

__all__ = ["HttpError", "setup_exception_handlers"]
