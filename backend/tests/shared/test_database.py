"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import get_supabase_client, reset_client_cache
from shared.exceptions import StoreError


@pytest.fixture(autouse=True)
def fresh_client_cache():
    reset_client_cache()
    yield
    reset_client_cache()


@pytest.fixture
def configured():
    with patch("shared.database.get_settings") as mock_settings:
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        yield mock_settings


class TestSupabaseClient:

    @patch("shared.database.create_client")
    def test_creates_service_role_client(self, mock_create, configured):
        mock_create.return_value = MagicMock()

        client = get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "test-key")
        assert client is mock_create.return_value

    @patch("shared.database.create_client")
    def test_client_is_cached_until_reset(self, mock_create, configured):
        mock_create.side_effect = [MagicMock(name="first"), MagicMock(name="second")]

        first = get_supabase_client()
        assert get_supabase_client() is first

        reset_client_cache()
        assert get_supabase_client() is not first
        assert mock_create.call_count == 2

    @pytest.mark.parametrize(
        "url,key,missing",
        [
            ("", "test-key", "SUPABASE_URL"),
            ("https://test.supabase.co", "", "SUPABASE_SERVICE_ROLE_KEY"),
        ],
    )
    def test_missing_configuration(self, url, key, missing):
        with patch("shared.database.get_settings") as mock_settings:
            mock_settings.return_value.supabase_url = url
            mock_settings.return_value.supabase_service_role_key = key

            with pytest.raises(StoreError, match=missing) as exc_info:
                get_supabase_client()

        assert exc_info.value.details["service"] == "supabase"
