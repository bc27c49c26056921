from __future__ import annotations

from typing import Optional

from .enums import PolicyBlockReason


class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` and ``status_code`` drive the structured failure body the HTTP layer
    renders, so every subclass overrides both.
    """

    kind = "DomainError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"
    status_code = 400

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "Unauthorized"
    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "Forbidden"
    status_code = 403


class NotFoundError(DomainError):
    kind = "NotFound"
    status_code = 404


class AlreadyClosedError(DomainError):
    """Raised when clocking out a shift that already has a clock-out."""

    kind = "AlreadyClosed"
    status_code = 409


class PolicyBlockError(DomainError):
    """Raised when the attendance rules deny a staff login."""

    kind = "PolicyBlock"
    status_code = 403

    def __init__(self, reason: PolicyBlockReason, message: str):
        super().__init__(message)
        self.reason = reason

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["reason"] = self.reason.value
        return body


class InternalError(DomainError):
    """Unexpected storage or programming failure surfaced to the caller."""

    kind = "InternalError"
    status_code = 500
