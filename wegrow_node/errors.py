"""
wegrow_node/errors.py
---------------------

Error taxonomy shared by the runtime and the HTTP layer.

Each error carries the HTTP status it maps to, so routers never translate
exceptions by hand; the app-level handler renders them as ``{"error": msg}``.
"""

from __future__ import annotations

from typing import Optional


class WeGrowError(RuntimeError):
    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


class ValidationError(WeGrowError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(WeGrowError):
    status_code = 401
    default_message = "Unauthorized"


class NotFound(WeGrowError):
    status_code = 404
    default_message = "Not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class QuestNotFound(NotFound):
    default_message = "Quest not found"


class RewardNotFound(NotFound):
    default_message = "Reward not found"


class PeerNotFound(NotFound):
    default_message = "Peer not found"


class Conflict(WeGrowError):
    status_code = 409
    default_message = "Conflict"


class EmailExists(Conflict):
    default_message = "Email already exists"


class InsufficientBalance(WeGrowError):
    status_code = 400
    default_message = "Not enough points"


class StorageFailure(WeGrowError):
    status_code = 500
    default_message = "Storage unavailable"


class Busy(WeGrowError):
    status_code = 503
    default_message = "Store busy, retry later"
