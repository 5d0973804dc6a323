"""Data models for the lexicon search service."""

from .entry import (
    CandidateMatch,
    Definition,
    FullDefinition,
    LexiconEntry,
    Pronunciation,
    Translation,
)
from .response import (
    SearchResult,
    SearchResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import SearchRequest

__all__ = [
    "CandidateMatch",
    "Definition",
    "FullDefinition",
    "LexiconEntry",
    "Pronunciation",
    "Translation",
    "SearchResult",
    "SearchResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "SearchRequest",
]
