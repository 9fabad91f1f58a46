"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
import random
from datetime import datetime, timezone, timedelta
from jose import jwt

from modules.users.models import User
from modules.users.store import InMemoryUserProfileStore


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    display_name: str = "Test Oyuncu",
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        display_name: Name stored in user_metadata

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "user_metadata": {"display_name": display_name},
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at 2025-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG for reproducible boards, codes and bot scores."""
    return random.Random(1234)


@pytest.fixture
def make_token():
    """Factory for signed test tokens."""
    return create_test_token


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def profiles(clock) -> InMemoryUserProfileStore:
    """Profile store with two players at full lives."""
    return InMemoryUserProfileStore(
        [
            User(id="alice", display_name="Alice", last_life_regeneration=clock(), created_at=clock()),
            User(id="bob", display_name="Bob", last_life_regeneration=clock(), created_at=clock()),
        ]
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
