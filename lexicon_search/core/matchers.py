"""Exact, prefix and full-text index match tiers."""

from enum import IntEnum
from typing import AbstractSet, List, Optional

from ..models.entry import CandidateMatch, LexiconEntry
from ..store.base import LexiconStore
from .normalizer import NormalizedQuery, QueryNormalizer
from .preview import DEFAULT_PREVIEW_LENGTH, truncate_preview


class Tier(IntEnum):
    """Match strategies in priority order; the value is the base score band."""
    
    EXACT = 0
    PREFIX = 1
    INDEX = 2
    FUZZY = 3


def prefix_score(word: str, prefix: str) -> float:
    """Shorter extensions of the prefix rank closer to an exact match."""
    return float(Tier.PREFIX) + 0.1 * max(0, len(word) - len(prefix))


def index_score(rank: float) -> float:
    return float(Tier.INDEX) + abs(rank)


def fuzzy_score(distance: int) -> float:
    return float(Tier.FUZZY) + distance


class TierMatcher:
    """Base class for one match tier backed by the lexicon store."""
    
    tier: Tier
    
    def __init__(self, store: LexiconStore, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> None:
        """
        Initialize the matcher.
        
        Args:
            store: Lexicon store used for candidate retrieval
            preview_length: Maximum preview length for candidates
        """
        self.store = store
        self.preview_length = preview_length
    
    @property
    def name(self) -> str:
        return self.tier.name.lower()
    
    def match(
        self,
        query: NormalizedQuery,
        limit: int,
        exclude: AbstractSet[int] = frozenset()
    ) -> List[CandidateMatch]:
        """
        Retrieve up to ``limit`` scored candidates for a normalized query.
        
        Args:
            query: Normalized query
            limit: Number of results still needed
            exclude: Ids already collected by higher-priority tiers
            
        Returns:
            Candidates in tier order
        """
        raise NotImplementedError
    
    def _candidate(self, entry: LexiconEntry, score: float) -> CandidateMatch:
        return CandidateMatch(
            id=entry.id,
            word=entry.word,
            pos=entry.pos,
            preview=truncate_preview(entry.definition, self.preview_length),
            score=score,
            match_type=self.name,
        )


class ExactMatcher(TierMatcher):
    """Entries whose headword equals the query verbatim."""
    
    tier = Tier.EXACT
    
    def exact_match(self, word: str, limit: int) -> List[CandidateMatch]:
        if limit <= 0:
            return []
        return [
            self._candidate(entry, float(Tier.EXACT))
            for entry in self.store.lookup_exact(word, limit)
        ]
    
    def match(self, query, limit, exclude=frozenset()):
        return self.exact_match(query.text, limit)


class PrefixMatcher(TierMatcher):
    """Entries whose headword starts with the query, shortest first."""
    
    tier = Tier.PREFIX
    
    def prefix_match(self, prefix: str, limit: int) -> List[CandidateMatch]:
        if limit <= 0:
            return []
        return [
            self._candidate(entry, prefix_score(entry.word, prefix))
            for entry in self.store.lookup_prefix(prefix, limit)
        ]
    
    def match(self, query, limit, exclude=frozenset()):
        return self.prefix_match(query.text, limit)


class IndexMatcher(TierMatcher):
    """Token matches from the store's full-text index."""
    
    tier = Tier.INDEX
    
    def __init__(
        self,
        store: LexiconStore,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
        normalizer: Optional[QueryNormalizer] = None
    ) -> None:
        super().__init__(store, preview_length)
        self.normalizer = normalizer or QueryNormalizer()
    
    def index_match(self, prepared_query: str, limit: int) -> List[CandidateMatch]:
        """
        Run a prepared query against the text index.
        
        An empty prepared query yields no results without touching the index.
        """
        if not prepared_query or limit <= 0:
            return []
        return [
            self._candidate(entry, index_score(rank))
            for entry, rank in self.store.lookup_indexed(prepared_query, limit)
        ]
    
    def match(self, query, limit, exclude=frozenset()):
        return self.index_match(self.normalizer.prepare_index_query(query.text), limit)
