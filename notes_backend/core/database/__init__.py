"""
Persistence layer of the notes backend.

``entities`` holds the SQLModel tables, ``repositories`` the data access
classes; ``session`` owns the process-wide engine and the request session
dependency, ``utils`` the engine and schema helpers shared with Alembic and
the tests.
"""

from .base import Base, utc_now_naive
from .session import async_session_maker, engine, get_session, init_db
from .utils import create_all, create_engine, create_sessionmaker, normalize_database_url

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "normalize_database_url",
    "utc_now_naive",
]
