# starstation/game/errors.py
from __future__ import annotations


class GameError(Exception):
    """
    Base for failures the game layer reports to callers.

    `detail` is what the API returns, in the same shape routes have always
    used for HTTPException details: either a string or a dict with "error".
    """

    status_code: int = 400
    default_error: str = "Game error"

    def __init__(self, detail: dict | str | None = None) -> None:
        if detail is None:
            detail = {"error": self.default_error}
        self.detail = detail
        super().__init__(detail["error"] if isinstance(detail, dict) else detail)


class ValidationError(GameError):
    status_code = 400
    default_error = "Invalid request"


class NotFoundError(GameError):
    status_code = 404
    default_error = "Not found"


class ConflictError(GameError):
    status_code = 409
    default_error = "Conflict"


class PersistenceError(GameError):
    status_code = 500
    default_error = "Storage unavailable"


# ----------------------------
# Specific cases
# ----------------------------

class UnknownBuildingType(NotFoundError):
    def __init__(self, building_type: str) -> None:
        super().__init__({"error": "Unknown building type", "building_type": building_type})


class DuplicateUsername(ConflictError):
    def __init__(self, username: str) -> None:
        super().__init__({"error": "Username already exists", "username": username})


class InsufficientResources(ConflictError):
    def __init__(self, cost: dict[str, int], missing: dict[str, int]) -> None:
        super().__init__({"error": "Insufficient resources", "cost": cost, "missing": missing})


class EventAlreadyActive(ConflictError):
    def __init__(self, event_type: str, ends_at: str) -> None:
        super().__init__(
            {"error": "An event is already active", "event_type": event_type, "ends_at": ends_at}
        )


class ConcurrentUpdate(ConflictError):
    default_error = "Game state was modified concurrently, retry"
