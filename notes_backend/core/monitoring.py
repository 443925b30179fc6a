"""
Monitoring and Tracing Configuration Module.

Pydantic Logfire integration: request timings, database spans, account
lifecycle events (registration, login, verification, password reset) and
unhandled errors.

Logfire stays off unless ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is
set. Reporting never raises: a failed emit is noted at debug level and the
request carries on.
"""

import logging
import os
from typing import Any, Callable, Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "notes-backend")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

LOGFIRE_TRACE_SQLALCHEMY = _flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_FASTAPI = _flag("LOGFIRE_TRACE_FASTAPI", "true")


def _instrument(target: str, instrument: Callable[[], Any]) -> None:
    try:
        instrument()
        logger.info(f"Logfire: {target} instrumentation enabled")
    except Exception as e:
        logger.warning(f"Failed to instrument {target}: {e}")


def _instrument_database() -> None:
    from notes_backend.core.database.session import engine

    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def initialize_logfire(app: Optional[FastAPI] = None) -> bool:
    """
    Configure Logfire and instrument the database engine and the app.

    Instrumentation failures are logged as warnings and do not undo the
    configuration.

    Args:
        app: Application to instrument; FastAPI tracing is skipped without one

    Returns:
        True when Logfire was configured, False when it stays disabled
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set; monitoring stays off.")
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    if LOGFIRE_TRACE_SQLALCHEMY:
        _instrument("SQLAlchemy", _instrument_database)
    if LOGFIRE_TRACE_FASTAPI and app is not None:
        _instrument("FastAPI", lambda: logfire.instrument_fastapi(app=app))

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Report a finished request with its status and duration in milliseconds."""
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_auth_event(event: str, user_id: Optional[str] = None, success: bool = True) -> None:
    """
    Report an account lifecycle event.

    Args:
        event: register, login, verify_email, forgot_password or reset_password
        user_id: The affected user, when known
        success: Whether the attempt succeeded
    """
    try:
        logfire.info("Auth event", event=event, user_id=user_id, success=success)
    except Exception:
        logger.debug(f"Could not log auth event to Logfire: {event}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    try:
        logfire.error(f"{error_type}: {error_message}", **(context or {}))
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
