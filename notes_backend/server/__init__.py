"""
Notes Backend Server Package.

This package contains the web server implementation of the notes backend.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration settings and static constants.
    exception_handlers: Error responses for domain, validation and unhandled errors.
    middleware: Request timing and monitoring.
    services: Business logic and FastAPI dependencies.
"""
