"""SQLite-backed lexicon store with an FTS5 headword index."""

import json
import sqlite3
import threading
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..models.entry import (
    Definition,
    FullDefinition,
    LexiconEntry,
    Pronunciation,
    Translation,
)
from .base import LexiconStore, StoreError

SCHEMA = """
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY,
    word TEXT NOT NULL,
    pos TEXT NOT NULL,
    language TEXT NOT NULL,
    etymology_num INTEGER DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_words_word ON words(word);
CREATE INDEX IF NOT EXISTS idx_words_language ON words(language);

CREATE VIRTUAL TABLE IF NOT EXISTS words_fts USING fts5(
    word,
    content='words',
    content_rowid='id'
);

CREATE TRIGGER IF NOT EXISTS words_ai AFTER INSERT ON words BEGIN
    INSERT INTO words_fts(rowid, word) VALUES (new.id, new.word);
END;

CREATE TRIGGER IF NOT EXISTS words_ad AFTER DELETE ON words BEGIN
    INSERT INTO words_fts(words_fts, rowid, word) VALUES('delete', old.id, old.word);
END;

CREATE TRIGGER IF NOT EXISTS words_au AFTER UPDATE ON words BEGIN
    INSERT INTO words_fts(words_fts, rowid, word) VALUES('delete', old.id, old.word);
    INSERT INTO words_fts(rowid, word) VALUES (new.id, new.word);
END;

CREATE TABLE IF NOT EXISTS definitions (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL,
    definition TEXT NOT NULL,
    examples TEXT,  -- JSON array
    tags TEXT,      -- JSON array
    FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_definitions_word_id ON definitions(word_id);

CREATE TABLE IF NOT EXISTS pronunciations (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL,
    ipa TEXT,
    audio_url TEXT,
    accent TEXT,
    FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_pronunciations_word_id ON pronunciations(word_id);

CREATE TABLE IF NOT EXISTS etymologies (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL,
    etymology_text TEXT NOT NULL,
    FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_etymologies_word_id ON etymologies(word_id);

CREATE TABLE IF NOT EXISTS translations (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL,
    target_language TEXT NOT NULL,
    translation TEXT NOT NULL,
    FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_translations_word_id ON translations(word_id);
CREATE INDEX IF NOT EXISTS idx_translations_language ON translations(target_language);
"""

# headword row plus its first definition
_SELECT_ENTRY = """
SELECT w.id, w.word, w.pos,
       COALESCE((SELECT definition FROM definitions
                 WHERE word_id = w.id ORDER BY id LIMIT 1), '')
"""

_HEADWORD_ORDER = "ORDER BY length(w.word), w.word, w.id"


def _glob_escape(text: str) -> str:
    """Escape GLOB metacharacters so ``text`` matches literally."""
    return "".join(f"[{ch}]" if ch in "*?[" else ch for ch in text)


def _json_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        return []
    return value if isinstance(value, list) else []


class SQLiteLexiconStore(LexiconStore):
    """
    Lexicon store on a SQLite database file.
    
    Each thread gets its own connection, so concurrent searches never share
    one. In read-only mode the database must already exist.
    """
    
    def __init__(self, db_path: str, read_only: bool = False) -> None:
        """
        Open (and, unless read-only, initialize) the database.
        
        Args:
            db_path: Path to the SQLite database file
            read_only: Open the file without write access
        """
        self.db_path = db_path
        self.read_only = read_only
        self._local = threading.local()
        self._connections: List[sqlite3.Connection] = []
        self._connections_lock = threading.Lock()
        
        if not read_only:
            try:
                self._connection().executescript(SCHEMA)
            except sqlite3.Error as exc:
                raise StoreError(f"Failed to initialize schema: {exc}") from exc
        else:
            # fail at startup rather than on the first search
            self._query("SELECT 1 FROM words LIMIT 1", ())
    
    # ---- Reads ----
    def lookup_exact(self, word: str, limit: int) -> List[LexiconEntry]:
        rows = self._query(
            f"{_SELECT_ENTRY} FROM words w WHERE w.word = ? ORDER BY w.id LIMIT ?",
            (word, max(limit, 0)),
        )
        return [self._row_to_entry(row) for row in rows]
    
    def lookup_prefix(self, prefix: str, limit: int) -> List[LexiconEntry]:
        rows = self._query(
            f"{_SELECT_ENTRY} FROM words w WHERE w.word GLOB ? {_HEADWORD_ORDER} LIMIT ?",
            (_glob_escape(prefix) + "*", max(limit, 0)),
        )
        return [self._row_to_entry(row) for row in rows]
    
    def lookup_indexed(self, prepared_query: str, limit: int) -> List[Tuple[LexiconEntry, float]]:
        rows = self._query(
            f"""
            {_SELECT_ENTRY}, fts.rank
            FROM words_fts fts
            JOIN words w ON fts.rowid = w.id
            WHERE words_fts MATCH ?
            ORDER BY fts.rank, w.id
            LIMIT ?
            """,
            (prepared_query, max(limit, 0)),
        )
        if not rows:
            return []
        # bm25 is negative and most negative is best; report the distance
        # from the best hit so a larger rank means a weaker match
        best = float(rows[0][4])
        return [(self._row_to_entry(row), float(row[4]) - best) for row in rows]
    
    def lookup_case_insensitive_prefix(self, prefix: str, limit: int) -> List[LexiconEntry]:
        folded = prefix.lower()
        rows = self._query(
            f"{_SELECT_ENTRY} FROM words w "
            f"WHERE substr(lower(w.word), 1, ?) = ? {_HEADWORD_ORDER} LIMIT ?",
            (len(folded), folded, max(limit, 0)),
        )
        return [self._row_to_entry(row) for row in rows]
    
    def lookup_case_insensitive_contains(self, fragment: str, limit: int) -> List[LexiconEntry]:
        rows = self._query(
            f"{_SELECT_ENTRY} FROM words w "
            f"WHERE instr(substr(lower(w.word), 2), ?) > 0 {_HEADWORD_ORDER} LIMIT ?",
            (fragment.lower(), max(limit, 0)),
        )
        return [self._row_to_entry(row) for row in rows]
    
    def get_full_definition(self, word_id: int) -> Optional[FullDefinition]:
        rows = self._query("SELECT word, pos, language FROM words WHERE id = ?", (word_id,))
        if not rows:
            return None
        word, pos, language = rows[0]
        
        definitions = [
            Definition(id=row[0], text=row[1], examples=_json_list(row[2]), tags=_json_list(row[3]))
            for row in self._query(
                "SELECT id, definition, examples, tags FROM definitions WHERE word_id = ? ORDER BY id",
                (word_id,),
            )
        ]
        pronunciations = [
            Pronunciation(id=row[0], ipa=row[1], audio_url=row[2], accent=row[3])
            for row in self._query(
                "SELECT id, ipa, audio_url, accent FROM pronunciations WHERE word_id = ? ORDER BY id",
                (word_id,),
            )
        ]
        etymology_rows = self._query(
            "SELECT etymology_text FROM etymologies WHERE word_id = ? ORDER BY id LIMIT 1",
            (word_id,),
        )
        translations = [
            Translation(id=row[0], target_language=row[1], translation=row[2])
            for row in self._query(
                "SELECT id, target_language, translation FROM translations WHERE word_id = ? ORDER BY id",
                (word_id,),
            )
        ]
        
        return FullDefinition(
            id=word_id,
            word=word,
            pos=pos,
            language=language,
            definitions=definitions,
            pronunciations=pronunciations,
            etymology=etymology_rows[0][0] if etymology_rows else None,
            translations=translations,
        )
    
    def count(self) -> int:
        return self._query("SELECT COUNT(*) FROM words", ())[0][0]
    
    # ---- Writes ----
    def add_entry(self, entry: FullDefinition) -> int:
        return self.add_entries([entry])[0]
    
    def add_entries(self, entries: Iterable[FullDefinition]) -> List[int]:
        """Insert entries in a single transaction and return their ids."""
        conn = self._connection()
        ids = []
        try:
            with conn:
                for entry in entries:
                    ids.append(self._insert_entry(conn, entry))
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to insert entries: {exc}") from exc
        return ids
    
    def close(self) -> None:
        """Close the connections opened by every thread."""
        with self._connections_lock:
            for conn in self._connections:
                conn.close()
            self._connections.clear()
        self._local = threading.local()
    
    # ---- Internals ----
    def _connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            return conn
        
        try:
            if self.read_only:
                uri = Path(self.db_path).resolve().as_uri() + "?mode=ro"
                conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
            else:
                conn = sqlite3.connect(self.db_path, check_same_thread=False)
                conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open lexicon database {self.db_path}: {exc}") from exc
        
        self._local.conn = conn
        with self._connections_lock:
            self._connections.append(conn)
        return conn
    
    def _query(self, sql: str, params: Sequence[Any]) -> List[tuple]:
        try:
            return self._connection().execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Lexicon query failed: {exc}") from exc
    
    @staticmethod
    def _row_to_entry(row: tuple) -> LexiconEntry:
        return LexiconEntry(id=row[0], word=row[1], pos=row[2], definition=row[3])
    
    @staticmethod
    def _insert_entry(conn: sqlite3.Connection, entry: FullDefinition) -> int:
        cursor = conn.execute(
            "INSERT INTO words (word, pos, language, etymology_num) VALUES (?, ?, ?, 0)",
            (entry.word, entry.pos, entry.language),
        )
        word_id = cursor.lastrowid
        
        conn.executemany(
            "INSERT INTO definitions (word_id, definition, examples, tags) VALUES (?, ?, ?, ?)",
            [
                (word_id, definition.text, json.dumps(definition.examples), json.dumps(definition.tags))
                for definition in entry.definitions
            ],
        )
        conn.executemany(
            "INSERT INTO pronunciations (word_id, ipa, audio_url, accent) VALUES (?, ?, ?, ?)",
            [
                (word_id, pronunciation.ipa, pronunciation.audio_url, pronunciation.accent)
                for pronunciation in entry.pronunciations
            ],
        )
        if entry.etymology:
            conn.execute(
                "INSERT INTO etymologies (word_id, etymology_text) VALUES (?, ?)",
                (word_id, entry.etymology),
            )
        conn.executemany(
            "INSERT INTO translations (word_id, target_language, translation) VALUES (?, ?, ?)",
            [
                (word_id, translation.target_language, translation.translation)
                for translation in entry.translations
            ],
        )
        return word_id
