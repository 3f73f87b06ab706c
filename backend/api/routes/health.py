"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings

from ..dependencies import ServiceContainer, get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    file_store: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse, responses={503: {"model": ReadinessResponse}})
async def readiness_check(
    container: ServiceContainer = Depends(get_container),
):
    """
    Readiness check endpoint.

    Checks that the data store answers and the uploads directory exists.
    Returns 503 when either is unavailable.
    """
    database = "memory" if container.uses_memory else "connected"
    if not container.uses_memory:
        try:
            container.user_repository.count()
        except Exception:
            logger.exception("Readiness: database check failed")
            database = "unavailable"

    uploads_dir = container.settings.uploads_dir
    file_store = "available" if uploads_dir.is_dir() else "missing"

    ready = database != "unavailable" and file_store == "available"
    body = ReadinessResponse(
        status="ready" if ready else "not_ready",
        database=database,
        file_store=file_store,
    )
    if not ready:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
