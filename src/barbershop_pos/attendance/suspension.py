from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import days_before, end_of_day, now_local, start_of_day
from ..core.constants import SHORT_DAY_THRESHOLD
from ..core.enums import Role, UserStatus
from ..shifts.calculator import ClosedShiftCalculator, WorkedTimeCalculator
from ..shifts.repository import ShiftRepository
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


class ShortShiftSuspension:
    """Flag staff who worked short days twice in a row.

    If the total worked time on both yesterday and the day before is under
    ``SHORT_DAY_THRESHOLD``, the user is set to away/inactive for the rest of
    today. Runs after every new clock-in.
    """

    def __init__(
        self,
        users: UserRepository,
        shifts: ShiftRepository,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
        threshold=SHORT_DAY_THRESHOLD,
    ):
        self._users = users
        self._shifts = shifts
        self._calculator = calculator or ClosedShiftCalculator()
        self._threshold = threshold

    def worked_on(self, user_id: int, day) -> timedelta:
        shifts = self._shifts.list_for_user_between(user_id, start=start_of_day(day), end=end_of_day(day))
        return self._calculator.total(shifts)

    def check(self, user_id: int, *, now: Optional[datetime] = None) -> bool:
        now = now or now_local()
        user = self._users.get_by_id(int(user_id))
        if not user or user.role != Role.STAFF:
            return False

        today = now.date()
        day1 = self.worked_on(user.user_id, days_before(today, 1))
        day2 = self.worked_on(user.user_id, days_before(today, 2))
        if day1 >= self._threshold or day2 >= self._threshold:
            return False

        self._users.set_status(user.user_id, status=UserStatus.AWAY, is_inactive=True)
        logger.warning(
            "user %s flagged away: worked %s yesterday and %s the day before",
            user.user_id,
            day1,
            day2,
        )
        return True
