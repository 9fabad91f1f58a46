"""
Centralized configuration for the Kelime Arena backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, TOURNAMENT_*).
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Kelime Arena API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Storage backend for users, rooms and tournaments
    storage_backend: Literal["memory", "supabase"] = "memory"

    # Lives
    max_lives: int = 5
    life_regeneration_minutes: int = 30
    lives_poll_seconds: int = 60
    lives_poll_idle_minutes: int = 30
    daily_play_limit: int = 50

    # Rooms
    default_target_score: int = 100
    default_time_limit: int = 120  # seconds
    vowel_probability: float = 0.3
    lexicon_path: Optional[str] = None

    # Tournaments
    tournament_size: int = 8
    tournament_fill_seconds: int = 30

    # Feature Flags
    enable_notifications: bool = True
    notification_dispatch_seconds: int = 5


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
