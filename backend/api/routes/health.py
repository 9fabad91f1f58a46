"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from api.dependencies import get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    lexicon_words: int
    pending_timers: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Loads the lexicon if it is not loaded yet and reports the storage
    backend and armed timers.
    """
    from modules.words.lexicon import load_default_lexicon

    container = get_container()
    lexicon = load_default_lexicon(container.settings.lexicon_path)
    return ReadinessResponse(
        status="ready" if len(lexicon) > 0 else "degraded",
        storage=container.settings.storage_backend,
        lexicon_words=len(lexicon),
        pending_timers=len(container.timers.pending),
    )
