"""
Error hierarchy for the Kelime Arena backend.

Modules raise subclasses of these bases (RoomNotFoundError,
TournamentFullError, PlayerNotInRoomError, ...). Each base carries the
HTTP status the API answers with when such an error is not translated by
a route, and ``code`` is the stable string clients switch on
(ROOM_NOT_FOUND, TOURNAMENT_FULL, STORE_CONFLICT, ...).

Running out of lives is not an error: it is reported as a PlayPermission.
"""

from typing import Optional, Any


class KelimeError(Exception):
    """
    Base exception for game errors.

    Args:
        message: Human-readable text, safe to show to the player
        code: Machine-readable code; defaults to the class name
        details: Extra fields for the client (ids, limits, versions)
    """

    http_status = 400

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Error body for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(KelimeError):
    """A room, tournament or profile id that does not exist."""

    http_status = 404


class ValidationError(KelimeError):
    """Rejected input or an action the current game state does not allow."""

    http_status = 422


class AuthorizationError(KelimeError):
    """The caller is signed in but not part of the room or not the host."""

    http_status = 403


class ExternalServiceError(KelimeError):
    """A backing service (Supabase, push provider) failed."""

    http_status = 503

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreError(ExternalServiceError):
    """A room, tournament or profile store could not complete an operation."""

    def __init__(self, store: str, message: str):
        super().__init__(
            f"Store operation failed ({store}): {message}",
            service=store,
            code="STORE_ERROR",
            details={"error": message},
        )


class StoreConflictError(ExternalServiceError):
    """
    A versioned write lost against a concurrent writer.

    The caller's view of the room or tournament is stale; re-reading and
    retrying the action is safe.
    """

    http_status = 409

    def __init__(self, store: str, entity_id: str, expected_version: int):
        super().__init__(
            f"Write conflict on {entity_id} (expected version {expected_version})",
            service=store,
            code="STORE_CONFLICT",
            details={"entity_id": entity_id, "expected_version": expected_version},
        )
