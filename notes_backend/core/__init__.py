"""
Core utilities and configuration for the notes backend.

This package provides core functionality including logging configuration,
database setup, security primitives, outgoing mail and other shared utilities.
"""

from notes_backend.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
