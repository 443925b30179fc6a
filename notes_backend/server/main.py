"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_backend.core.database import init_db
from notes_backend.core.logging_config import get_logger, setup_logging
from notes_backend.core.monitoring import initialize_logfire

from .api.v1 import auth, health, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup. A database that is unreachable at
    startup is logged, not fatal: requests fail individually until it is back.
    """
    try:
        logger.info("Starting up Notes Backend...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Notes Backend...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Notes Backend API

    Account and authentication service of the notes application: registration with
    e-mail verification, JWT login, password reset, profile maintenance and user
    administration.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# The frontend sends the token cookie, so origins must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router)
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    uvicorn.run(
        "notes_backend.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
