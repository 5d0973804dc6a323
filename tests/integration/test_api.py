"""Integration tests for the API endpoints."""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from lexicon_search.config import Settings
from lexicon_search.main import create_app
from lexicon_search.store.base import LexiconStore, StoreError


class TestAPI:
    """Integration tests for API endpoints."""
    
    @pytest.fixture
    def client(self, sample_store):
        """Create a test client serving the sample entries."""
        return TestClient(create_app(Settings(log_format="console"), store=sample_store))
    
    @pytest.fixture
    def failing_client(self):
        """Create a test client whose lexicon store always fails."""
        store = Mock(spec=LexiconStore)
        store.lookup_exact.side_effect = StoreError("database disk image is malformed")
        store.get_full_definition.side_effect = StoreError("database disk image is malformed")
        return TestClient(create_app(Settings(log_format="console"), store=store))
    
    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        
        data = response.json()
        assert data["name"] == "Lexicon Search"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"
    
    def test_search_exact_match(self, client):
        """Test exact search functionality."""
        response = client.get("/api/v1/search/hello")
        assert response.status_code == 200
        
        data = response.json()
        assert data["query"] == "hello"
        assert data["limit"] == 20
        assert data["offset"] == 0
        assert data["results"][0]["word"] == "hello"
        assert data["results"][0]["score"] == 0.0
        assert data["results"][0]["match_type"] == "exact"
        assert data["results"][0]["preview"].startswith("A greeting")
        assert data["total_results"] == len(data["results"])
    
    def test_search_fuzzy_match(self, client):
        """Test typo-tolerant search."""
        response = client.get("/api/v1/search/helo")
        assert response.status_code == 200
        
        data = response.json()
        assert {r["word"] for r in data["results"]} == {"hello", "help"}
        assert all(r["match_type"] == "fuzzy" for r in data["results"])
    
    def test_search_pagination(self, client):
        first = client.get("/api/v1/search/hel?limit=2").json()
        second = client.get("/api/v1/search/hel?limit=2&offset=2").json()
        
        assert [r["word"] for r in first["results"]] == ["help", "hello"]
        assert [r["word"] for r in second["results"]] == ["helper", "helping"]
        assert second["offset"] == 2
    
    def test_search_blank_query(self, client):
        response = client.get("/api/v1/search/%20%20")
        
        assert response.status_code == 200
        assert response.json()["results"] == []
    
    def test_search_no_results(self, client):
        data = client.get("/api/v1/search/xyzzy").json()
        assert data["total_results"] == 0
    
    def test_limit_clamped(self, client):
        data = client.get("/api/v1/search/hel?limit=5000").json()
        assert data["limit"] == 200
    
    @pytest.mark.parametrize("params", ["limit=-1", "offset=-5", "limit=abc"])
    def test_invalid_paging(self, client, params):
        response = client.get(f"/api/v1/search/hel?{params}")
        assert response.status_code == 422
    
    def test_query_too_long(self, client):
        """Test search with a query exceeding the maximum length."""
        response = client.get(f"/api/v1/search/{'a' * 101}")
        
        assert response.status_code == 400
        assert "too long" in response.json()["detail"]
    
    def test_body_query_too_long(self, client):
        response = client.post("/api/v1/search", json={"query": "a" * 101})
    
        assert response.status_code == 400
        assert "too long" in response.json()["detail"]
    
    def test_body_limits_follow_settings(self, sample_store):
        """Configured bounds apply to request bodies as well as paths."""
        settings = Settings(log_format="console", max_query_length=150, max_limit=3)
        client = TestClient(create_app(settings, store=sample_store))
    
        response = client.post("/api/v1/search", json={"query": "hel" + "p" * 120, "limit": 500})
        assert response.status_code == 200
        assert response.json()["limit"] == 3
    
        data = client.post("/api/v1/search", json={"query": "hel", "limit": 500}).json()
        assert [r["word"] for r in data["results"]] == ["help", "hello", "helper"]
    
    def test_startup_fails_without_database(self, tmp_path):
        settings = Settings(log_format="console", db_path=str(tmp_path / "missing.db"))
    
        # the lifespan error may reach the caller wrapped by the test portal
        with pytest.raises(Exception):
            with TestClient(create_app(settings)):
                pass
    
    def test_search_with_body(self, client):
        """Test search with a JSON request body."""
        response = client.post("/api/v1/search", json={"query": "hel", "limit": 3, "offset": 1})
        assert response.status_code == 200
        
        data = response.json()
        assert [r["word"] for r in data["results"]] == ["hello", "helper", "helping"]
    
    def test_search_with_invalid_body(self, client):
        response = client.post("/api/v1/search", json={"limit": 3})
        assert response.status_code == 422
    
    def test_get_definition(self, client):
        word_id = client.get("/api/v1/search/help").json()["results"][0]["id"]
        
        response = client.get(f"/api/v1/definition/{word_id}")
        assert response.status_code == 200
        
        data = response.json()
        assert data["word"] == "help"
        assert data["pos"] == "verb"
        assert data["definitions"][0]["text"] == "To provide assistance to someone."
    
    def test_definition_not_found(self, client):
        assert client.get("/api/v1/definition/999").status_code == 404
    
    @pytest.mark.parametrize("word_id", ["0", "abc"])
    def test_definition_invalid_id(self, client, word_id):
        assert client.get(f"/api/v1/definition/{word_id}").status_code == 422
    
    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["lexicon_store"] == "healthy"
        assert data["uptime"] >= 0
    
    def test_metrics_endpoint(self, client):
        """Test metrics endpoint after a few searches."""
        client.get("/api/v1/search/hello")
        client.get("/api/v1/search/xyzzy")
        
        response = client.get("/api/v1/metrics")
        assert response.status_code == 200
        
        data = response.json()
        assert data["total_queries"] == 2
        assert data["empty_results"] == 1
        assert data["failed_queries"] == 0
        assert data["average_response_time_ms"] >= 0
        assert data["memory_usage_mb"] > 0
    
    def test_store_failure_returns_503(self, failing_client):
        response = failing_client.get("/api/v1/search/hello")
        assert response.status_code == 503
        
        metrics = failing_client.get("/api/v1/metrics").json()
        assert metrics["failed_queries"] == 1
    
    def test_definition_store_failure(self, failing_client):
        assert failing_client.get("/api/v1/definition/1").status_code == 503
    
    def test_health_reports_store_failure(self, failing_client):
        data = failing_client.get("/api/v1/health").json()
        
        assert data["status"] == "unhealthy"
        assert data["dependencies"]["lexicon_store"] == "unhealthy"
    
    def test_cors_headers(self, client):
        """Test CORS headers are present."""
        response = client.get("/api/v1/health", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
