"""Typo-tolerant matching over a bounded candidate set."""

from typing import AbstractSet, Dict, List

import structlog

from ..models.entry import CandidateMatch, LexiconEntry
from ..store.base import LexiconStore
from .distance import levenshtein
from .matchers import Tier, TierMatcher, fuzzy_score
from .preview import DEFAULT_PREVIEW_LENGTH

MIN_FUZZY_QUERY_LENGTH = 3
MAX_FUZZY_DISTANCE = 2
PREFIX_CANDIDATE_LIMIT = 1000
SUFFIX_CANDIDATE_LIMIT = 500
ANCHOR_LENGTH = 2

logger = structlog.get_logger(__name__)


class FuzzyMatcher(TierMatcher):
    """
    Finds entries within a small edit distance of the query.
    
    Scanning the whole lexicon is too slow for search-as-you-type, so
    candidates come from two cheap store lookups:
    
    1. headwords sharing the first two characters of the query;
    2. headwords containing the query minus its first character anywhere
       after their own first character, which recovers typos in the
       initial letter.
    
    Candidates are then scored by Levenshtein distance on lowercased text.
    """
    
    tier = Tier.FUZZY
    
    def __init__(
        self,
        store: LexiconStore,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
        min_query_length: int = MIN_FUZZY_QUERY_LENGTH,
        max_distance: int = MAX_FUZZY_DISTANCE,
        prefix_candidates: int = PREFIX_CANDIDATE_LIMIT,
        suffix_candidates: int = SUFFIX_CANDIDATE_LIMIT
    ) -> None:
        """
        Initialize the fuzzy matcher.
        
        Args:
            store: Lexicon store used for candidate retrieval
            preview_length: Maximum preview length for candidates
            min_query_length: Shorter queries skip the fuzzy tier
            max_distance: Largest edit distance kept
            prefix_candidates: Cap on the prefix-anchored scan
            suffix_candidates: Cap on the suffix-anchored scan
        """
        super().__init__(store, preview_length)
        self.min_query_length = min_query_length
        self.max_distance = max_distance
        self.prefix_candidates = prefix_candidates
        self.suffix_candidates = suffix_candidates
    
    def fuzzy_match(
        self,
        query: str,
        limit: int,
        exclude: AbstractSet[int] = frozenset()
    ) -> List[CandidateMatch]:
        """
        Find near matches for a lowercased query.
        
        Args:
            query: Lowercased query
            limit: Maximum number of results
            exclude: Ids that must not be returned (already found)
            
        Returns:
            Candidates sorted by score, at most ``limit`` of them
        """
        if limit <= 0 or len(query) < self.min_query_length:
            return []
        
        matches: Dict[int, CandidateMatch] = {}
        seen = set(exclude)
        
        anchor = query[:min(ANCHOR_LENGTH, len(query))]
        self._score_candidates(
            query,
            self.store.lookup_case_insensitive_prefix(anchor, self.prefix_candidates),
            seen,
            matches,
        )
        prefix_found = len(matches)
        
        if len(matches) < limit and len(query) >= 2:
            self._score_candidates(
                query,
                self.store.lookup_case_insensitive_contains(query[1:], self.suffix_candidates),
                seen,
                matches,
            )
        
        logger.debug(
            "Fuzzy candidates scored",
            query=query,
            prefix_matches=prefix_found,
            suffix_matches=len(matches) - prefix_found,
        )
        
        # stable: equal scores keep store order
        ranked = sorted(matches.values(), key=lambda match: match.score)
        return ranked[:limit]
    
    def match(self, query, limit, exclude=frozenset()):
        return self.fuzzy_match(query.folded, limit, exclude)
    
    def _score_candidates(
        self,
        query: str,
        entries: List[LexiconEntry],
        seen: set,
        matches: Dict[int, CandidateMatch]
    ) -> None:
        for entry in entries:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            
            word = entry.word.lower()
            # distance is at least the length difference
            if abs(len(word) - len(query)) > self.max_distance:
                continue
            
            distance = levenshtein(query, word)
            # distance 0 belongs to the exact tier
            if 0 < distance <= self.max_distance:
                matches[entry.id] = self._candidate(entry, fuzzy_score(distance))
