"""Tests for health check endpoints."""


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_readiness_check(self, client):
        """Readiness endpoint reports storage and the loaded lexicon."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["storage"] == "memory"
        assert data["lexicon_words"] > 100
        assert data["pending_timers"] == 0

    def test_health_response_structure(self, client):
        """Health response should have correct structure."""
        data = client.get("/api/health").json()
        assert set(data.keys()) == {"status", "version"}

    def test_readiness_response_structure(self, client):
        """Readiness response should have correct structure."""
        data = client.get("/api/ready").json()
        assert set(data.keys()) == {"status", "storage", "lexicon_words", "pending_timers"}
