"""
Health Check Endpoints.

Liveness, readiness and version endpoints for load balancers and deployment
checks. They sit outside ``/api/v1`` and need no token.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from notes_backend.core.logging_config import get_logger
from notes_backend.server.core.constant import PROJECT_NAME, SCHEMA_VERSION, VERSION
from notes_backend.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness", description="Report that the process is serving requests.")
async def health_check():
    return {"status": "ok"}


@router.get(
    "/health/ready",
    summary="Readiness",
    description="Report whether the database answers queries.",
    responses={503: {"description": "Database unavailable"}},
)
async def readiness(session: SessionDep):
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "fail", "message": "Database unavailable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get("/version", summary="Get Version", description="Service name, release and API schema version.")
async def version():
    return {"name": PROJECT_NAME, "version": VERSION, "schema_version": SCHEMA_VERSION}
