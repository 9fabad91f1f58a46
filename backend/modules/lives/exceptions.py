"""
Lives module exceptions.
"""

from shared.exceptions import ValidationError


class InvalidPremiumDurationError(ValidationError):
    """Raised when premium is granted for a non-positive number of days."""

    def __init__(self, days: int):
        super().__init__(
            f"Premium duration must be positive, got {days} days",
            code="INVALID_PREMIUM_DURATION",
            details={"days": days},
        )
