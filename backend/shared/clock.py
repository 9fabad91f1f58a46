"""
Time source used by services.

Services take a ``clock`` callable instead of reading the wall clock directly,
so tests can pin "now" to a fixed instant.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
