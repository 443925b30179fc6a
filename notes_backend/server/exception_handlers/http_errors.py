"""
Domain HTTP errors.

Services raise ``HttpError`` for every expected failure; the registered
handlers render it, and request validation errors, as
``{"status": "fail", "message": ...}``.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notes_backend.core.logging_config import get_logger

logger = get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


class HttpError(Exception):
    """An expected failure with the status code and message the client receives."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return f"HttpError: message: {self.message}, status: {self.status_code}"

    @classmethod
    def bad_request(cls, message: str) -> "HttpError":
        return cls(message, status.HTTP_400_BAD_REQUEST)

    @classmethod
    def unauthorized(cls, message: str) -> "HttpError":
        return cls(message, status.HTTP_401_UNAUTHORIZED)

    @classmethod
    def forbidden(cls, message: str) -> "HttpError":
        return cls(message, status.HTTP_403_FORBIDDEN)

    @classmethod
    def not_found(cls, message: str) -> "HttpError":
        return cls(message, status.HTTP_404_NOT_FOUND)

    @classmethod
    def unique_constraint_violation(cls, message: str) -> "HttpError":
        return cls(message, status.HTTP_409_CONFLICT)

    @classmethod
    def server_error(cls, message: str) -> "HttpError":
        return cls(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def fail_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "fail", "message": message})


def summarize_validation_errors(errors) -> str:
    """Collapse pydantic errors into ``field: message`` parts joined by ``; ``."""
    parts = []
    for error in errors:
        message = error.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
    """Render an ``HttpError``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return fail_response(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation errors as a 400 with a readable summary."""
    message = summarize_validation_errors(exc.errors())
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {message}")
    return fail_response(message, status.HTTP_400_BAD_REQUEST)
