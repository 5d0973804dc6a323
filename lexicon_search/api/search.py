"""Search API endpoints."""

import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query

from ..config import Settings
from ..core.engine import SearchEngine
from ..models.request import SearchRequest
from ..models.response import SearchResponse
from ..store.base import StoreError
from .dependencies import get_app_settings, get_engine, get_metrics
from .stats import QueryMetrics

router = APIRouter(prefix="/api/v1", tags=["search"])
logger = structlog.get_logger(__name__)


def run_search(
    engine: SearchEngine,
    settings: Settings,
    metrics: QueryMetrics,
    query: str,
    limit: Optional[int],
    offset: int
) -> SearchResponse:
    """Run one search and wrap it in a response, mapping store failures to 503."""
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )
    
    limit = settings.default_limit if limit is None else min(limit, settings.max_limit)
    start_time = time.time()
    try:
        results = engine.search(query, limit=limit, offset=offset)
    except StoreError as e:
        metrics.record_failure()
        logger.error("Lexicon store failure", query=query, error=str(e))
        raise HTTPException(status_code=503, detail=f"Lexicon store unavailable: {e}")
    
    execution_time = (time.time() - start_time) * 1000
    metrics.record(execution_time, len(results))
    
    return SearchResponse(
        query=query,
        limit=limit,
        offset=offset,
        total_results=len(results),
        results=results,
        execution_time_ms=execution_time,
    )


@router.get(
    "/search/{query}",
    response_model=SearchResponse,
    summary="Search dictionary entries",
    description="Ranked exact, prefix, full-text and typo-tolerant matches for a query"
)
async def search_word(
    query: str = Path(..., description="The text to search for"),
    limit: Optional[int] = Query(None, ge=0, description="Maximum number of results to return"),
    offset: int = Query(0, ge=0, description="Number of ranked results to skip"),
    engine: SearchEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
    metrics: QueryMetrics = Depends(get_metrics)
) -> SearchResponse:
    """
    Search for dictionary entries matching a query.
    
    A blank query returns an empty result list.
    """
    return run_search(engine, settings, metrics, query, limit, offset)


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search with request body",
    description="Search dictionary entries using a structured request body"
)
async def search_with_body(
    request: SearchRequest,
    engine: SearchEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
    metrics: QueryMetrics = Depends(get_metrics)
) -> SearchResponse:
    """Search for dictionary entries using a JSON request body."""
    return run_search(engine, settings, metrics, request.query, request.limit, request.offset)
