"""Health check API endpoints."""

import time

from fastapi import APIRouter, Depends, Request

from ..config import Settings
from ..core.engine import SearchEngine
from ..models.response import HealthResponse
from ..store.base import StoreError
from .dependencies import get_app_settings, get_engine

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the search service"
)
async def health_check(
    request: Request,
    engine: SearchEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings)
) -> HealthResponse:
    """
    Perform a health check on the search service.
    
    Runs a probe search so a broken lexicon store shows up as unhealthy.
    """
    uptime = time.time() - request.app.state.started_at
    
    dependencies = {"lexicon_store": "healthy"}
    try:
        engine.search("test", limit=1)
    except StoreError:
        dependencies["lexicon_store"] = "unhealthy"
    
    status = "healthy" if all(s == "healthy" for s in dependencies.values()) else "unhealthy"
    
    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=uptime,
        dependencies=dependencies,
    )
