from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from ..users.model import User
from .rules.base import LoginRule
from .rules.hours_rule import OutsideHoursRule
from .rules.shift_ended_rule import ShiftEndedRule
from .rules.status_rules import RestDayRule, SuspendedRule

if TYPE_CHECKING:
    from ..shifts.service import ShiftLedger


@dataclass
class LoginRuleFactory:
    """Factory Pattern: choose the login rules that apply to a user."""

    ledger: "ShiftLedger"

    def for_user(self, user: User) -> Sequence[LoginRule]:
        if user.is_admin:
            return ()

        # Order matters: the first failing rule is the one reported.
        return (
            OutsideHoursRule(),
            SuspendedRule(),
            RestDayRule(),
            ShiftEndedRule(self.ledger),
        )
