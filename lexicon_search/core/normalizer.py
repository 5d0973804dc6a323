"""Query normalization and index query preparation."""

import re
from typing import List, NamedTuple, Optional


class NormalizedQuery(NamedTuple):
    """A validated query in the two forms the match tiers consume."""
    
    text: str    # trimmed, original case: exact, prefix and index tiers
    folded: str  # lowercased copy: fuzzy tier only


class QueryNormalizer:
    """Trims and validates raw queries and prepares text index queries."""
    
    def __init__(self) -> None:
        """Initialize the normalizer."""
        # Characters with a meaning in the text index query syntax
        self.reserved_regex = re.compile(r'["*^:]')
        
    def normalize(self, query: Optional[str]) -> Optional[NormalizedQuery]:
        """
        Normalize a raw user query.
        
        Args:
            query: Raw query as typed by the user
            
        Returns:
            NormalizedQuery, or None when nothing is left after trimming
        """
        if not query:
            return None
        
        text = query.strip()
        if not text:
            return None
        
        return NormalizedQuery(text=text, folded=text.lower())
    
    def tokenize(self, query: str) -> List[str]:
        """
        Split a query into index tokens with reserved characters removed.
        
        Tokens without any alphanumeric character are dropped; the index
        tokenizer would discard them anyway.
        """
        if not query:
            return []
        
        escaped = self.reserved_regex.sub(" ", query)
        return [
            token for token in escaped.split()
            if any(ch.isalnum() for ch in token)
        ]
    
    def prepare_index_query(self, query: str) -> str:
        """
        Prepare a query for the full-text index.
        
        Every token becomes a quoted prefix term, so ``hel wor`` turns into
        ``"hel"* "wor"*`` and matches entries containing tokens starting with
        both. Returns an empty string when no usable token remains.
        """
        return " ".join(f'"{token}"*' for token in self.tokenize(query))
