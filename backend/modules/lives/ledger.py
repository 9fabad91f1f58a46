"""
Life ledger: pure functions over a user's life pool.

Lives regenerate one per interval while the pool is below the maximum.
The regeneration anchor only moves forward in whole intervals, so the
partial interval already waited carries over to the next tick. Every
function takes ``now`` explicitly and never reads the wall clock.
"""

from datetime import datetime, timedelta

from modules.users.models import User

from .models import (
    LIFE_REGENERATION_INTERVAL,
    MAX_LIVES,
    NO_LIVES_REASON,
    LifeSource,
    PlayPermission,
    Remedy,
)


def regenerate(
    user: User,
    now: datetime,
    max_lives: int = MAX_LIVES,
    interval: timedelta = LIFE_REGENERATION_INTERVAL,
) -> User:
    """
    Credit lives earned since the anchor.

    Idempotent for a fixed ``now``: the anchor advances by exactly the
    credited intervals, so a second call finds less than one interval.
    """
    elapsed = now - user.last_life_regeneration
    units = elapsed // interval

    if units > 0 and user.lives < max_lives:
        return user.model_copy(
            update={
                "lives": min(user.lives + units, max_lives),
                "last_life_regeneration": user.last_life_regeneration + units * interval,
            }
        )
    return user


def consume(
    user: User,
    now: datetime,
    max_lives: int = MAX_LIVES,
) -> User:
    """
    Spend one life.

    No-op on an empty pool; callers check can_play() first. Spending from a
    full pool restarts the regeneration clock, so time idled while full is
    not banked.
    """
    if user.lives <= 0:
        return user

    update: dict = {"lives": user.lives - 1}
    if user.lives >= max_lives:
        update["last_life_regeneration"] = now
    return user.model_copy(update=update)


def add_life(
    user: User,
    source: LifeSource,
    max_lives: int = MAX_LIVES,
) -> User:
    """Grant one life (ad, purchase or reward), capped at the maximum."""
    return user.model_copy(update={"lives": min(user.lives + 1, max_lives)})


def time_until_next_life(
    user: User,
    now: datetime,
    max_lives: int = MAX_LIVES,
    interval: timedelta = LIFE_REGENERATION_INTERVAL,
) -> timedelta:
    if user.lives >= max_lives:
        return timedelta(0)
    elapsed = now - user.last_life_regeneration
    return max(interval - (elapsed % interval), timedelta(0))


def time_until_full(
    user: User,
    now: datetime,
    max_lives: int = MAX_LIVES,
    interval: timedelta = LIFE_REGENERATION_INTERVAL,
) -> timedelta:
    if user.lives >= max_lives:
        return timedelta(0)
    lives_needed = max_lives - user.lives
    return time_until_next_life(user, now, max_lives, interval) + (lives_needed - 1) * interval


def can_play(
    user: User,
    now: datetime,
    max_lives: int = MAX_LIVES,
    interval: timedelta = LIFE_REGENERATION_INTERVAL,
) -> PlayPermission:
    """Allowed with at least one life or an active premium window."""
    premium = user.is_premium(now)
    if user.lives > 0 or premium:
        return PlayPermission(allowed=True, lives=user.lives, is_premium=premium)

    wait = time_until_next_life(user, now, max_lives, interval)
    return PlayPermission(
        allowed=False,
        reason=NO_LIVES_REASON,
        lives=user.lives,
        next_life_in_seconds=int(wait.total_seconds()),
        remedies=[Remedy.WAIT, Remedy.WATCH_AD, Remedy.PURCHASE],
    )
