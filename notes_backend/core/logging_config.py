"""
Logging Configuration Module.

Central logging setup for the notes backend. The level follows the server
settings (``LOG_LEVEL``); the line format and the optional log file are
chosen with ``LOG_FORMAT`` (simple, detailed or json), ``LOG_FILE_DIR`` and
``ENABLE_FILE_LOGGING``. The file is size-rotated.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "notes_backend.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _configured_level() -> str:
    # Settings import is deferred so the config module may log while loading
    try:
        from notes_backend.server.core.config import settings

        return settings.log_level.upper()
    except Exception:
        return os.getenv("LOG_LEVEL", "INFO").upper()


LOG_LEVEL = _configured_level()
LOG_FORMAT = os.getenv("LOG_FORMAT", "detailed").lower()
LOG_FILE_DIR = os.getenv("LOG_FILE_DIR", "logs")
ENABLE_FILE_LOGGING = _env_flag("ENABLE_FILE_LOGGING")

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

_FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

# Per-logger levels; the request-handling layers log their decisions at DEBUG
MODULE_LOG_LEVELS = {
    "notes_backend.core": "INFO",
    "notes_backend.core.database": "INFO",
    "notes_backend.core.mail": "INFO",
    "notes_backend.server": "INFO",
    "notes_backend.server.api": "DEBUG",
    "notes_backend.server.services": "DEBUG",
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _select_format(fmt: str) -> str:
    return _FORMATS.get(fmt.lower(), DETAILED_FORMAT)


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    directory = Path(LOG_FILE_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        directory / LOG_FILE_NAME, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure the root logger.

    Safe to call more than once: existing root handlers are replaced.

    Args:
        log_level: Console level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format override (simple, detailed, json)
        enable_file: Allow the rotating log file when ``ENABLE_FILE_LOGGING`` is set
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(_select_format(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    # Handlers filter; the root passes everything
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        root_logger.addHandler(_file_handler(formatter))

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
