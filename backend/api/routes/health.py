"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from shared.exceptions import ConfigurationError
from ..dependencies import get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    tokens: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns 503 when the token signing configuration is unusable.
    """
    container = get_container()
    try:
        container.token_config()
        tokens = "configured"
    except ConfigurationError:
        tokens = "missing"

    response = ReadinessResponse(
        status="ready" if tokens == "configured" else "not_ready",
        storage=container.settings.storage_backend,
        tokens=tokens,
    )
    if response.status != "ready":
        return JSONResponse(status_code=503, content=response.model_dump())
    return response
