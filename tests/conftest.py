"""Shared fixtures for the lexicon search tests."""

import sqlite3
from typing import Iterable, Optional, Tuple

import pytest

from lexicon_search.config import Settings
from lexicon_search.models.entry import Definition, FullDefinition
from lexicon_search.store.memory import MemoryLexiconStore

SAMPLE_ENTRIES = [
    ("hello", "intj", "A greeting used when meeting or answering someone."),
    ("help", "verb", "To provide assistance to someone."),
    ("helper", "noun", "A person who helps another."),
    ("helping", "noun", "A portion of food served to one person at one time."),
    ("helicopter", "noun", "An aircraft kept aloft by one or more rotating blades."),
]


def make_entry(word: str, pos: str = "noun", definition: Optional[str] = None) -> FullDefinition:
    definitions = [Definition(text=definition)] if definition else []
    return FullDefinition(word=word, pos=pos, definitions=definitions)


def build_store(entries: Iterable[Tuple[str, str, str]]) -> MemoryLexiconStore:
    store = MemoryLexiconStore()
    for word, pos, definition in entries:
        store.add_entry(make_entry(word, pos, definition))
    return store


def fts5_available() -> bool:
    conn = sqlite3.connect(":memory:")
    try:
        conn.execute("CREATE VIRTUAL TABLE probe USING fts5(x)")
        return True
    except sqlite3.OperationalError:
        return False
    finally:
        conn.close()


@pytest.fixture
def sample_store():
    """Memory store holding the hello/help/helper/helping/helicopter entries."""
    return build_store(SAMPLE_ENTRIES)


@pytest.fixture
def settings():
    """Default search settings."""
    return Settings()


@pytest.fixture
def entry_factory():
    """Build FullDefinition objects for add_entry."""
    return make_entry


@pytest.fixture
def store_factory():
    """Build a memory store from (word, pos, definition) tuples."""
    return build_store


@pytest.fixture
def sqlite_db_path(tmp_path):
    """Path of a SQLite lexicon populated with the sample entries."""
    if not fts5_available():
        pytest.skip("SQLite build lacks FTS5")
    
    from lexicon_search.store.sqlite_store import SQLiteLexiconStore
    
    db_path = str(tmp_path / "dictionary.db")
    store = SQLiteLexiconStore(db_path)
    store.add_entries(make_entry(word, pos, definition) for word, pos, definition in SAMPLE_ENTRIES)
    store.close()
    return db_path


@pytest.fixture
def sqlite_store(sqlite_db_path):
    """Writable SQLite store holding the sample entries."""
    from lexicon_search.store.sqlite_store import SQLiteLexiconStore
    
    store = SQLiteLexiconStore(sqlite_db_path)
    yield store
    store.close()


@pytest.fixture
def empty_sqlite_store(tmp_path):
    """Writable SQLite store with the schema but no entries."""
    if not fts5_available():
        pytest.skip("SQLite build lacks FTS5")
    
    from lexicon_search.store.sqlite_store import SQLiteLexiconStore
    
    store = SQLiteLexiconStore(str(tmp_path / "empty.db"))
    yield store
    store.close()
