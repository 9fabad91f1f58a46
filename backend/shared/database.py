"""
Supabase client for the persistent stores.

Profiles, rooms and tournaments live in Supabase tables when
STORAGE_BACKEND=supabase. The engine writes every player's state in a room
or bracket, so it uses the service-role key and bypasses row level security.
"""

from typing import Optional
import logging

from supabase import create_client, Client

from .config import get_settings
from .exceptions import StoreError

logger = logging.getLogger(__name__)

_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the shared service-role client, creating it on first use.

    Raises:
        StoreError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", settings.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise StoreError("supabase", f"configuration missing: {', '.join(missing)}")

        logger.info(f"Connecting to Supabase at {settings.supabase_url}")
        _service_client = create_client(settings.supabase_url, settings.supabase_service_role_key)

    return _service_client


def reset_client_cache() -> None:
    """Drop the cached client so the next call reads settings again."""
    global _service_client
    _service_client = None
