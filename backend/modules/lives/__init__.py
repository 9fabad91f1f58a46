"""
Lives module.

The life economy: lives regenerate one per interval up to a cap, a game
start spends one, ads and purchases grant more, premium bypasses gating.

Public API:
- ledger: Pure life pool functions taking ``now`` explicitly
- ILivesService: Interface used by rooms and the API layer
- LivesService: Ledger plus persistence, notifications and counters
- LifeRegenerationPoller: Background refresh of active users

Usage:
    from modules.lives import LivesService, LifeSource

    permission = await lives.can_play(user_id)
    if permission.allowed:
        await lives.consume_for_game(user_id)
"""

from . import ledger
from .interfaces import ILivesService
from .models import (
    DAILY_LIMIT_REASON,
    DAILY_PLAY_LIMIT,
    LIFE_REGENERATION_INTERVAL,
    MAX_LIVES,
    NO_LIVES_REASON,
    DailyLimit,
    GrantPremiumRequest,
    LifeSource,
    LivesStatus,
    PlayPermission,
    Remedy,
)
from .exceptions import InvalidPremiumDurationError
from .service import LivesService
from .poller import LifeRegenerationPoller

__all__ = [
    # Ledger
    "ledger",
    # Interfaces
    "ILivesService",
    # Models
    "DAILY_LIMIT_REASON",
    "DAILY_PLAY_LIMIT",
    "LIFE_REGENERATION_INTERVAL",
    "MAX_LIVES",
    "NO_LIVES_REASON",
    "DailyLimit",
    "GrantPremiumRequest",
    "LifeSource",
    "LivesStatus",
    "PlayPermission",
    "Remedy",
    # Exceptions
    "InvalidPremiumDurationError",
    # Service
    "LivesService",
    "LifeRegenerationPoller",
]
