"""In-memory lexicon store for tests, demos and small word lists."""

import re
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..models.entry import FullDefinition, LexiconEntry
from .base import LexiconStore

# Quoted prefix terms as produced by QueryNormalizer.prepare_index_query
_TERM_REGEX = re.compile(r'"([^"]*)"\*')
_TOKEN_REGEX = re.compile(r"\w+")


def _headword_order(entry: LexiconEntry) -> Tuple[int, str, int]:
    return len(entry.word), entry.word, entry.id


class MemoryLexiconStore(LexiconStore):
    """Dictionary entries held in a dict keyed by id."""
    
    def __init__(self) -> None:
        """Initialize an empty store."""
        self._entries: Dict[int, FullDefinition] = {}
        self._rows: Dict[int, LexiconEntry] = {}
        self._next_id = 1
        self._lock = threading.RLock()
    
    def add_entry(self, entry: FullDefinition) -> int:
        """
        Add a dictionary entry.
        
        Args:
            entry: The entry to store; its id is assigned here
            
        Returns:
            The new entry id
        """
        with self._lock:
            word_id = self._next_id
            self._next_id += 1
            
            self._entries[word_id] = entry.model_copy(update={"id": word_id}, deep=True)
            self._rows[word_id] = LexiconEntry(
                id=word_id,
                word=entry.word,
                pos=entry.pos,
                definition=entry.first_definition,
            )
            return word_id
    
    def lookup_exact(self, word: str, limit: int) -> List[LexiconEntry]:
        return self._select(lambda row: row.word == word, limit, key=lambda row: row.id)
    
    def lookup_prefix(self, prefix: str, limit: int) -> List[LexiconEntry]:
        return self._select(lambda row: row.word.startswith(prefix), limit)
    
    def lookup_indexed(self, prepared_query: str, limit: int) -> List[Tuple[LexiconEntry, float]]:
        """
        Match quoted prefix terms against headword tokens.
        
        Every term must prefix some token of the headword. The rank is a
        tenth of the characters the matched tokens add beyond the terms.
        """
        terms = [
            token
            for term in _TERM_REGEX.findall(prepared_query)
            for token in _TOKEN_REGEX.findall(term.lower())
        ]
        if not terms or limit <= 0:
            return []
        
        hits = []
        for row in self._snapshot():
            tokens = _TOKEN_REGEX.findall(row.word.lower())
            rank = 0.0
            for term in terms:
                extensions = [len(token) - len(term) for token in tokens if token.startswith(term)]
                if not extensions:
                    break
                rank += 0.1 * min(extensions)
            else:
                hits.append((row, rank))
        
        hits.sort(key=lambda hit: (hit[1],) + _headword_order(hit[0]))
        return hits[:limit]
    
    def lookup_case_insensitive_prefix(self, prefix: str, limit: int) -> List[LexiconEntry]:
        folded = prefix.lower()
        return self._select(lambda row: row.word.lower().startswith(folded), limit)
    
    def lookup_case_insensitive_contains(self, fragment: str, limit: int) -> List[LexiconEntry]:
        folded = fragment.lower()
        return self._select(lambda row: row.word.lower().find(folded, 1) != -1, limit)
    
    def get_full_definition(self, word_id: int) -> Optional[FullDefinition]:
        with self._lock:
            entry = self._entries.get(word_id)
            return entry.model_copy(deep=True) if entry is not None else None
    
    def count(self) -> int:
        with self._lock:
            return len(self._entries)
    
    def _snapshot(self) -> List[LexiconEntry]:
        with self._lock:
            return list(self._rows.values())
    
    def _select(
        self,
        predicate: Callable[[LexiconEntry], bool],
        limit: int,
        key: Callable[[LexiconEntry], Any] = _headword_order
    ) -> List[LexiconEntry]:
        if limit <= 0:
            return []
        rows = [row for row in self._snapshot() if predicate(row)]
        rows.sort(key=key)
        return rows[:limit]
