from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import end_of_day
from ...core.enums import PolicyBlockReason, UserStatus
from ...users.model import User
from .base import LoginRule


class SuspendedRule(LoginRule):
    reason = PolicyBlockReason.SUSPENDED
    message = "You have been suspended for today. Please rest and return tomorrow."

    def blocks(self, user: User, *, now: datetime) -> bool:
        return user.status == UserStatus.SUSPENDED


class RestDayRule(LoginRule):
    """Flagged for short shifts: blocked for the rest of the current day."""

    reason = PolicyBlockReason.REST_DAY
    message = "You should be resting today. Please come early tomorrow."

    def blocks(self, user: User, *, now: datetime) -> bool:
        return user.is_inactive and user.status == UserStatus.AWAY and now <= end_of_day(now.date())
