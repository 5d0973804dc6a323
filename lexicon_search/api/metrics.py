"""Metrics and monitoring API endpoints."""

import psutil
from fastapi import APIRouter, Depends

from ..models.response import MetricsResponse
from .dependencies import get_metrics
from .stats import QueryMetrics

router = APIRouter(prefix="/api/v1", tags=["metrics"])


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query statistics and memory usage of the search service"
)
async def get_service_metrics(metrics: QueryMetrics = Depends(get_metrics)) -> MetricsResponse:
    """Get query statistics and process memory usage."""
    stats = metrics.get_stats()
    memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)
    
    return MetricsResponse(
        total_queries=stats["total_queries"],
        empty_results=stats["empty_results"],
        failed_queries=stats["failed_queries"],
        average_response_time_ms=stats["average_execution_time_ms"],
        memory_usage_mb=memory_usage_mb,
    )
