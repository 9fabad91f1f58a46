"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Kelime Arena API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.app_version == "0.1.0"
        assert settings.storage_backend == "memory"

    def test_game_defaults(self):
        """Game tunables should default to the published rules."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.max_lives == 5
        assert settings.life_regeneration_minutes == 30
        assert settings.lives_poll_seconds == 60
        assert settings.lives_poll_idle_minutes == 30
        assert settings.daily_play_limit == 50
        assert settings.default_target_score == 100
        assert settings.default_time_limit == 120
        assert settings.vowel_probability == 0.3
        assert settings.tournament_size == 8
        assert settings.tournament_fill_seconds == 30
        assert settings.enable_notifications is True

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "TOURNAMENT_FILL_SECONDS": "5"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.tournament_fill_seconds == 5

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "STORAGE_BACKEND": "supabase",
        }):
            settings = Settings()
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.storage_backend == "supabase"

    def test_rejects_unknown_storage_backend(self):
        with patch.dict(os.environ, {"STORAGE_BACKEND": "firestore"}):
            with pytest.raises(ValueError):
                Settings()


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
