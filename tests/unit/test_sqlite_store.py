"""Unit tests for the SQLite lexicon store."""

import sqlite3
import threading

import pytest

from lexicon_search.config import Settings
from lexicon_search.core.engine import SearchEngine
from lexicon_search.models.entry import (
    Definition,
    FullDefinition,
    Pronunciation,
    Translation,
)
from lexicon_search.store.base import StoreError
from lexicon_search.store.sqlite_store import SQLiteLexiconStore, _glob_escape


class TestSQLiteLexiconStore:
    """Test cases for the SQLiteLexiconStore class."""
    
    def test_count(self, sqlite_store):
        assert sqlite_store.count() == 5
    
    def test_lookup_exact(self, sqlite_store):
        entries = sqlite_store.lookup_exact("hello", 10)
        
        assert [(e.word, e.pos) for e in entries] == [("hello", "intj")]
        assert entries[0].definition == "A greeting used when meeting or answering someone."
        assert sqlite_store.lookup_exact("Hello", 10) == []
    
    def test_lookup_prefix_order(self, sqlite_store):
        words = [e.word for e in sqlite_store.lookup_prefix("hel", 10)]
        
        assert words == ["help", "hello", "helper", "helping", "helicopter"]
        assert [e.word for e in sqlite_store.lookup_prefix("hel", 2)] == ["help", "hello"]
        assert sqlite_store.lookup_prefix("hel", 0) == []
    
    def test_lookup_prefix_is_case_sensitive(self, sqlite_store):
        assert sqlite_store.lookup_prefix("Hel", 10) == []
    
    def test_lookup_prefix_escapes_glob(self, sqlite_store, entry_factory):
        sqlite_store.add_entry(entry_factory("a*b"))
        sqlite_store.add_entry(entry_factory("axb"))
        
        assert [e.word for e in sqlite_store.lookup_prefix("a*", 10)] == ["a*b"]
    
    def test_glob_escape(self):
        assert _glob_escape("a*b?[c") == "a[*]b[?][[]c"
    
    def test_lookup_indexed(self, sqlite_store):
        hits = sqlite_store.lookup_indexed('"hel"*', 10)
        
        assert {entry.word for entry, _ in hits} == {"help", "hello", "helper", "helping", "helicopter"}
        ranks = [rank for _, rank in hits]
        assert ranks == sorted(ranks)
        assert ranks[0] == 0.0
        assert all(rank >= 0.0 for rank in ranks)
    
    def test_index_order_survives_scoring(self, empty_sqlite_store, entry_factory):
        """The best full-text hit keeps the lowest index score."""
        store = empty_sqlite_store
        store.add_entries(entry_factory(word) for word in ["hello big wide world", "say hello", "hello"])
        native = [entry.word for entry, _ in store.lookup_indexed('"Hello"*', 10)]
    
        results = SearchEngine(store, Settings()).search("Hello", limit=3)
    
        assert native[0] == "hello"
        assert [r.word for r in results] == native
        assert all(r.match_type == "index" for r in results)
        assert results[0].score == 2.0
        scores = [r.score for r in results]
        assert scores == sorted(scores)
    
    def test_lookup_indexed_ignores_case(self, sqlite_store):
        hits = sqlite_store.lookup_indexed('"Hello"*', 10)
        assert [entry.word for entry, _ in hits] == ["hello"]
    
    def test_malformed_index_query_raises_store_error(self, sqlite_store):
        with pytest.raises(StoreError):
            sqlite_store.lookup_indexed('"unterminated', 10)
    
    def test_lookup_case_insensitive_prefix(self, sqlite_store, entry_factory):
        sqlite_store.add_entry(entry_factory("Hermes", "name"))
        
        words = [e.word for e in sqlite_store.lookup_case_insensitive_prefix("HE", 10)]
        
        assert words[:2] == ["help", "hello"]
        assert "Hermes" in words
        assert len(words) == 6
    
    def test_lookup_case_insensitive_contains(self, sqlite_store):
        words = [e.word for e in sqlite_store.lookup_case_insensitive_contains("ELP", 10)]
        
        assert words == ["help", "helper", "helping"]
        assert sqlite_store.lookup_case_insensitive_contains("hel", 10) == []
    
    def test_full_definition_round_trip(self, sqlite_store):
        word_id = sqlite_store.add_entry(FullDefinition(
            word="tea",
            pos="noun",
            definitions=[
                Definition(text="A hot drink.", examples=["A cup of tea."], tags=["informal"]),
                Definition(text="A light afternoon meal."),
            ],
            pronunciations=[Pronunciation(ipa="/tiː/", accent="UK")],
            etymology="From Min Chinese.",
            translations=[Translation(target_language="fr", translation="thé")],
        ))
        
        definition = sqlite_store.get_full_definition(word_id)
        
        assert definition.word == "tea"
        assert definition.language == "English"
        assert [d.text for d in definition.definitions] == ["A hot drink.", "A light afternoon meal."]
        assert definition.definitions[0].examples == ["A cup of tea."]
        assert definition.definitions[0].tags == ["informal"]
        assert definition.pronunciations[0].ipa == "/tiː/"
        assert definition.etymology == "From Min Chinese."
        assert definition.translations[0].translation == "thé"
        assert sqlite_store.lookup_exact("tea", 1)[0].definition == "A hot drink."
    
    def test_missing_definition(self, sqlite_store):
        assert sqlite_store.get_full_definition(9999) is None
    
    def test_read_only_store(self, sqlite_db_path, entry_factory):
        store = SQLiteLexiconStore(sqlite_db_path, read_only=True)
        try:
            assert store.count() == 5
            with pytest.raises(StoreError):
                store.add_entry(entry_factory("new"))
        finally:
            store.close()
    
    def test_read_only_missing_file(self, tmp_path):
        """A missing database fails when the store is opened."""
        with pytest.raises(StoreError):
            SQLiteLexiconStore(str(tmp_path / "missing.db"), read_only=True)
    
    def test_read_only_without_schema(self, tmp_path):
        db_path = tmp_path / "empty.db"
        sqlite3.connect(str(db_path)).close()
        
        with pytest.raises(StoreError):
            SQLiteLexiconStore(str(db_path), read_only=True)
    
    def test_connection_per_thread(self, sqlite_store):
        results = []
        
        def worker():
            results.append([e.word for e in sqlite_store.lookup_prefix("hel", 2)])
        
        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        
        assert results == [["help", "hello"]] * 4
    
    def test_engine_over_sqlite(self, sqlite_store):
        engine = SearchEngine(sqlite_store, Settings())
        
        assert [r.word for r in engine.search("hel")] == ["help", "hello", "helper", "helping", "helicopter"]
        
        results = engine.search("Hello")
        assert results[0].word == "hello"
        assert results[0].match_type == "index"
        assert results[0].score >= 2.0
        
        assert {r.word for r in engine.search("helo")} == {"hello", "help"}
