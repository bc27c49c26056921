from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ...core.enums import PolicyBlockReason
from ...users.model import User
from .base import LoginRule

if TYPE_CHECKING:
    from ...shifts.service import ShiftLedger


class ShiftEndedRule(LoginRule):
    """One shift per day: no login once today's shift has been closed."""

    reason = PolicyBlockReason.SHIFT_ENDED
    message = "Your shift has ended. Please return tomorrow."

    def __init__(self, ledger: "ShiftLedger"):
        self._ledger = ledger

    def blocks(self, user: User, *, now: datetime) -> bool:
        # Looking up the active shift also closes one left open overnight.
        if self._ledger.get_active_shift(user.user_id, now=now):
            return False
        today = self._ledger.shifts_for_day(user.user_id, now.date())
        return any(not s.is_open for s in today)
