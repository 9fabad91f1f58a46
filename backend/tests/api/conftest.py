"""
Fixtures for API tests.

Each test gets a fresh service container (in-memory stores) and a
TestClient that runs the application lifespan. The push drain only runs
once at startup, so tests can inspect the schedule table.
"""

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import get_container, reset_container
from shared.config import get_settings


@pytest.fixture
def client(monkeypatch, jwt_secret):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", jwt_secret)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("ENABLE_NOTIFICATIONS", "true")
    monkeypatch.setenv("NOTIFICATION_DISPATCH_SECONDS", "3600")
    get_settings.cache_clear()
    reset_container()

    with TestClient(app) as test_client:
        yield test_client

    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def container(client):
    """The container serving the current client."""
    return get_container()


@pytest.fixture
def alice_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id='alice', email='alice@example.com', display_name='Alice')}"}


@pytest.fixture
def bob_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id='bob', email='bob@example.com', display_name='Bob')}"}
