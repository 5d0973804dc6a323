"""
Lexicon Search - offline dictionary search for search-as-you-type.

Blends four match tiers of decreasing confidence (exact, prefix, full-text
index, typo-tolerant fuzzy) into one ranked, deduplicated and paginated
result list.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .models.response import SearchResult
from .store import LexiconStore, MemoryLexiconStore, SQLiteLexiconStore, StoreError

__all__ = [
    "SearchEngine",
    "SearchResult",
    "LexiconStore",
    "MemoryLexiconStore",
    "SQLiteLexiconStore",
    "StoreError",
]
