"""
Preferences module.

Key-value store for per-user toggles and soft counters.
"""

from .interfaces import IPreferenceStore
from .store import InMemoryPreferenceStore
from .keys import (
    ad_rewards_key,
    daily_plays_key,
    notifications_enabled_key,
    sound_enabled_key,
    parse_counter,
    parse_flag,
)

__all__ = [
    "IPreferenceStore",
    "InMemoryPreferenceStore",
    "ad_rewards_key",
    "daily_plays_key",
    "notifications_enabled_key",
    "sound_enabled_key",
    "parse_counter",
    "parse_flag",
]
