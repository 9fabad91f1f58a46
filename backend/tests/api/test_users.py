"""Tests for the user profile endpoint."""


class TestProfile:

    def test_first_call_creates_profile(self, client, alice_headers):
        response = client.get("/api/users/me", headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "alice"
        assert data["display_name"] == "Alice"
        assert data["email"] == "alice@example.com"
        assert data["lives"] == 5
        assert data["badges"] == []

    def test_requires_auth(self, client):
        response = client.get("/api/users/me")
        assert response.status_code == 401
