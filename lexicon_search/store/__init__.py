"""Lexicon store implementations."""

from .base import LexiconStore, StoreError
from .memory import MemoryLexiconStore
from .sqlite_store import SQLiteLexiconStore

__all__ = [
    "LexiconStore",
    "StoreError",
    "MemoryLexiconStore",
    "SQLiteLexiconStore",
]
