"""Lexicon store contract used by the search core."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models.entry import FullDefinition, LexiconEntry


class StoreError(Exception):
    """The lexicon store could not answer a lookup."""


class LexiconStore(ABC):
    """
    Read access to dictionary entries.
    
    Lookups return at most ``limit`` entries. Implementations must be safe
    for concurrent readers.
    """
    
    @abstractmethod
    def lookup_exact(self, word: str, limit: int) -> List[LexiconEntry]:
        """Entries whose headword equals ``word``."""
    
    @abstractmethod
    def lookup_prefix(self, prefix: str, limit: int) -> List[LexiconEntry]:
        """Entries whose headword starts with ``prefix``, ordered by (length, headword)."""
    
    @abstractmethod
    def lookup_indexed(self, prepared_query: str, limit: int) -> List[Tuple[LexiconEntry, float]]:
        """
        (entry, rank) pairs from the text index, best rank first.
        
        Ranks are non-negative and grow as relevance drops, so the best hit
        has the smallest rank.
        """
    
    @abstractmethod
    def lookup_case_insensitive_prefix(self, prefix: str, limit: int) -> List[LexiconEntry]:
        """Entries whose case-folded headword starts with the case-folded ``prefix``."""
    
    @abstractmethod
    def lookup_case_insensitive_contains(self, fragment: str, limit: int) -> List[LexiconEntry]:
        """Entries whose case-folded headword contains ``fragment`` after its first character."""
    
    @abstractmethod
    def get_full_definition(self, word_id: int) -> Optional[FullDefinition]:
        """Complete entry for ``word_id``, or None if it does not exist."""
    
    @abstractmethod
    def add_entry(self, entry: FullDefinition) -> int:
        """Store an entry and return its id."""
    
    def close(self) -> None:
        """Release resources held by the store."""
