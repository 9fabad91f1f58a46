"""
Shared infrastructure for the Kelime Arena backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- store/repository: Document store interface and implementations
- locks/scheduler/clock: Per-entity serialization, deadline timers, time source

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .clock import Clock, utc_now
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    KelimeError,
    NotFoundError,
    ValidationError,
    AuthorizationError,
    ExternalServiceError,
    StoreError,
    StoreConflictError,
)
from .locks import KeyedLock
from .models import AuthenticatedUser, TokenPayload
from .scheduler import DeadlineScheduler
from .store import IDocumentStore, InMemoryDocumentStore

__all__ = [
    "Settings",
    "get_settings",
    "Clock",
    "utc_now",
    "get_supabase_client",
    "reset_client_cache",
    "KelimeError",
    "NotFoundError",
    "ValidationError",
    "AuthorizationError",
    "ExternalServiceError",
    "StoreError",
    "StoreConflictError",
    "KeyedLock",
    "AuthenticatedUser",
    "TokenPayload",
    "DeadlineScheduler",
    "IDocumentStore",
    "InMemoryDocumentStore",
]
