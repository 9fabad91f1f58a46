"""
Tests for shared models.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from shared.models import AuthenticatedUser, TokenPayload


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_create_with_required_fields(self):
        """Should create user with only required fields."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        assert user.id == "user-123"
        assert user.email == "test@example.com"

    def test_default_values(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        assert user.email_verified is False
        assert user.display_name is None
        assert user.last_sign_in is None

    def test_all_fields(self):
        now = datetime.now(timezone.utc)
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            email_verified=True,
            display_name="Ayşe",
            last_sign_in=now,
        )
        assert user.email_verified is True
        assert user.display_name == "Ayşe"
        assert user.last_sign_in == now

    def test_email_validation(self):
        """Should validate email format."""
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="not-an-email")

    def test_is_frozen(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(ValidationError):
            user.id = "other"

    def test_ignores_extra_claims(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com", role="authenticated")
        assert not hasattr(user, "role")


class TestTokenPayload:
    def test_metadata_defaults_to_empty(self):
        payload = TokenPayload(
            sub="user-123",
            email="test@example.com",
            aud="authenticated",
            exp=9999999999,
            iat=1704067200,
        )
        assert payload.user_metadata == {}
        assert payload.app_metadata == {}
        assert payload.email_confirmed_at is None
