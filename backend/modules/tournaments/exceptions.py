"""
Tournaments module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class TournamentNotFoundError(NotFoundError):
    """Raised when a tournament ID does not exist."""

    def __init__(self, tournament_id: str):
        super().__init__(
            f"Tournament not found: {tournament_id}",
            code="TOURNAMENT_NOT_FOUND",
            details={"tournament_id": tournament_id},
        )


class TournamentFullError(ValidationError):
    """Raised when joining a tournament with no free slot."""

    def __init__(self, tournament_id: str, size: int):
        super().__init__(
            f"Tournament {tournament_id} already has {size} participants",
            code="TOURNAMENT_FULL",
            details={"tournament_id": tournament_id, "size": size},
        )


class TournamentNotJoinableError(ValidationError):
    """Raised when joining a tournament that is no longer waiting."""

    def __init__(self, tournament_id: str, status: str):
        super().__init__(
            f"Tournament {tournament_id} is {status} and cannot be joined",
            code="TOURNAMENT_NOT_JOINABLE",
            details={"tournament_id": tournament_id, "status": status},
        )


class TournamentNotActiveError(ValidationError):
    """Raised when an operation needs a different tournament status."""

    def __init__(self, tournament_id: str, status: str, expected: str):
        super().__init__(
            f"Tournament {tournament_id} is {status}, expected {expected}",
            code="TOURNAMENT_NOT_ACTIVE",
            details={"tournament_id": tournament_id, "status": status, "expected": expected},
        )


class TournamentHostOnlyError(AuthorizationError):
    """Raised when someone other than the host starts or disbands."""

    def __init__(self, tournament_id: str, user_id: str):
        super().__init__(
            f"Only the host can do this in tournament {tournament_id}",
            code="TOURNAMENT_HOST_ONLY",
            details={"tournament_id": tournament_id, "user_id": user_id},
        )


class InvalidMatchResultError(ValidationError):
    """Raised when a reported result does not fit the bracket."""

    def __init__(self, tournament_id: str, reason: str):
        super().__init__(
            f"Invalid match result for tournament {tournament_id}: {reason}",
            code="INVALID_MATCH_RESULT",
            details={"tournament_id": tournament_id, "reason": reason},
        )
