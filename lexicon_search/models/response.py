"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .entry import CandidateMatch


class SearchResult(CandidateMatch):
    """Individual search result, after global sort and pagination."""

    @classmethod
    def from_candidate(cls, candidate: CandidateMatch) -> "SearchResult":
        return cls(**candidate.model_dump())


class SearchResponse(BaseModel):
    """Response for search queries."""
    
    query: str = Field(..., description="Original search query")
    limit: int = Field(..., description="Requested page size")
    offset: int = Field(..., description="Requested page offset")
    total_results: int = Field(..., description="Number of results in this page")
    results: List[SearchResult] = Field(..., description="Search results")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error response model."""
    
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""
    
    total_queries: int = Field(..., description="Total queries processed")
    empty_results: int = Field(..., description="Queries that returned no results")
    failed_queries: int = Field(..., description="Queries that failed in the lexicon store")
    average_response_time_ms: float = Field(..., description="Average response time")
    memory_usage_mb: float = Field(..., description="Resident memory of the service process in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
