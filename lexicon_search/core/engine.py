"""Main search engine implementation."""

from typing import List, Optional

import structlog

from ..config import Settings, get_settings
from ..models.entry import FullDefinition
from ..models.response import SearchResult
from ..store.base import LexiconStore
from .fuzzy_matcher import FuzzyMatcher
from .matchers import ExactMatcher, IndexMatcher, PrefixMatcher, TierMatcher
from .merger import ResultAccumulator, paginate
from .normalizer import QueryNormalizer

logger = structlog.get_logger(__name__)


class SearchEngine:
    """
    Multi-tier dictionary search over a lexicon store.
    
    The engine holds no mutable state of its own: one instance can serve
    concurrent searches as long as the store supports concurrent reads.
    Callers own the instance and pass it wherever searches happen.
    """
    
    def __init__(self, store: LexiconStore, settings: Optional[Settings] = None) -> None:
        """
        Initialize the search engine.
        
        Args:
            store: Lexicon store providing candidate lookups
            settings: Search settings (uses the application settings if None)
        """
        settings = settings or get_settings()
        self.store = store
        self.normalizer = QueryNormalizer()
        
        preview_length = settings.preview_max_length
        # Priority order; a tier only runs while results are still needed
        self.matchers: List[TierMatcher] = [
            ExactMatcher(store, preview_length),
            PrefixMatcher(store, preview_length),
            IndexMatcher(store, preview_length, self.normalizer),
            FuzzyMatcher(
                store,
                preview_length,
                min_query_length=settings.min_fuzzy_query_length,
                max_distance=settings.max_fuzzy_distance,
                prefix_candidates=settings.fuzzy_prefix_candidates,
                suffix_candidates=settings.fuzzy_suffix_candidates,
            ),
        ]
    
    def search(self, query: str, limit: int = 10, offset: int = 0) -> List[SearchResult]:
        """
        Search for dictionary entries matching a query.
        
        Each call recomputes the tiered candidate set, so pages of the same
        query are consistent for an unchanged store.
        
        Args:
            query: Raw user query
            limit: Maximum number of results to return
            offset: Number of ranked results to skip
            
        Returns:
            Ranked, deduplicated results; empty for a blank query
            
        Raises:
            ValueError: If limit or offset is negative
            StoreError: If the lexicon store fails
        """
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")
        
        normalized = self.normalizer.normalize(query)
        if normalized is None:
            return []
        
        accumulator = ResultAccumulator(offset + limit)
        for matcher in self.matchers:
            if accumulator.satisfied:
                break
            candidates = matcher.match(normalized, accumulator.remaining, accumulator.seen_ids)
            added = accumulator.extend(candidates)
            logger.debug(
                "Tier completed",
                tier=matcher.name,
                fetched=len(candidates),
                added=added,
            )
        
        page = paginate(accumulator.ranked(), offset, limit)
        logger.debug(
            "Search completed",
            query=normalized.text,
            collected=len(accumulator),
            returned=len(page),
        )
        return [SearchResult.from_candidate(candidate) for candidate in page]
    
    def get_definition(self, word_id: int) -> Optional[FullDefinition]:
        """
        Get the complete entry for a search result id.
        
        Returns:
            FullDefinition, or None if the id does not exist
        """
        return self.store.get_full_definition(word_id)
