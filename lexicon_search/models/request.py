"""Request models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request model for search queries."""
    
    query: str = Field(..., description="Search query")
    limit: Optional[int] = Field(None, ge=0, description="Maximum number of results to return")
    offset: int = Field(default=0, ge=0, description="Number of ranked results to skip")
