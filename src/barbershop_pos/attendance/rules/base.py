from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...core.enums import PolicyBlockReason
from ...core.exceptions import PolicyBlockError
from ...users.model import User


class LoginRule(ABC):
    """Strategy Pattern: one attendance condition a staff login must satisfy."""

    reason: PolicyBlockReason
    message: str

    @abstractmethod
    def blocks(self, user: User, *, now: datetime) -> bool:
        raise NotImplementedError

    def enforce(self, user: User, *, now: datetime) -> None:
        if self.blocks(user, now=now):
            raise PolicyBlockError(self.reason, self.message)
