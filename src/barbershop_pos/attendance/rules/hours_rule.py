from __future__ import annotations

from datetime import datetime

from ...clock.day_rules import is_before_login_opening
from ...core.enums import PolicyBlockReason
from ...users.model import User
from .base import LoginRule


class OutsideHoursRule(LoginRule):
    """No staff login before the shop opens for logins (07:00), any day."""

    reason = PolicyBlockReason.OUTSIDE_HOURS
    message = "Staff login opens at 7:00 AM."

    def blocks(self, user: User, *, now: datetime) -> bool:
        return is_before_login_opening(now)
