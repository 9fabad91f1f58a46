"""
Preference key builders.

Keys are namespaced per user so one store can serve every player.
"""

from datetime import date
from typing import Optional


def notifications_enabled_key(user_id: str) -> str:
    return f"notifications_enabled:{user_id}"


def sound_enabled_key(user_id: str) -> str:
    return f"sound_enabled:{user_id}"


def ad_rewards_key(user_id: str) -> str:
    return f"ad_reward:{user_id}"


def daily_plays_key(user_id: str, day: date) -> str:
    return f"daily_plays:{user_id}:{day.isoformat()}"


def parse_counter(value: Optional[str]) -> int:
    """Read a stored counter; missing or corrupt values count as zero."""
    if not value:
        return 0
    try:
        return max(int(value), 0)
    except ValueError:
        return 0


def parse_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() == "true"
