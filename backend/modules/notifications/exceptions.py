"""
Notifications module exceptions.
"""

from shared.exceptions import ValidationError


class InvalidCronSpecError(ValidationError):
    """Raised when a recurring schedule is not a five-field cron expression."""

    def __init__(self, cron_spec: str):
        super().__init__(
            f"Invalid cron spec: {cron_spec!r}",
            code="INVALID_CRON_SPEC",
            details={"cron_spec": cron_spec},
        )


class InvalidDelayError(ValidationError):
    """Raised when a one-shot notification is scheduled in the past."""

    def __init__(self, seconds: float):
        super().__init__(
            f"Notification delay must not be negative, got {seconds}s",
            code="INVALID_DELAY",
            details={"seconds": seconds},
        )
