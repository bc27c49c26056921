from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional, Sequence

from ..clock import day_rules
from ..common.datetime_utils import end_of_day, now_local, start_of_day
from ..core.constants import AUTO_CLOSE_AT
from ..core.exceptions import (
    AlreadyClosedError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from ..users.repository import UserRepository
from .model import Shift, ShiftWithUser
from .repository import ShiftRepository

if TYPE_CHECKING:
    from ..attendance.suspension import ShortShiftSuspension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockInResult:
    shift: Shift
    created: bool


class ShiftLedger:
    """Lifecycle of shift records: open, close, auto-close stale ones.

    A user has at most one open shift. Open shifts left over from a previous day
    are closed at that day's last instant the next time they are looked up.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        users: UserRepository,
        *,
        suspension: Optional["ShortShiftSuspension"] = None,
    ):
        self._shifts = shifts
        self._users = users
        self._suspension = suspension

    def get_active_shift(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[Shift]:
        now = now or now_local()
        shift = self._shifts.get_latest_open_for_user(int(user_id))
        if not shift:
            return None

        if shift.clock_in.date() != now.date():
            closed_at = end_of_day(shift.clock_in.date())
            self._shifts.set_clock_out(shift.shift_id, closed_at)
            logger.info("auto-closed stale shift %s of user %s at %s", shift.shift_id, shift.user_id, closed_at)
            return None
        return shift

    def clock_in(self, user_id: int, *, now: Optional[datetime] = None) -> ClockInResult:
        now = now or now_local()

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.is_admin:
            raise ValidationError("Admins do not clock in", field="userId")

        active = self.get_active_shift(user.user_id, now=now)
        if active:
            return ClockInResult(shift=active, created=False)

        shift_id = self._shifts.create_open(
            user_id=user.user_id,
            clock_in=now,
            is_late=day_rules.is_late_arrival(now),
            day_type=day_rules.day_type(now),
        )
        shift = self._require(shift_id)
        logger.info("user %s clocked in (shift %s, late=%s)", user.user_id, shift_id, shift.is_late)

        if self._suspension:
            try:
                self._suspension.check(user.user_id, now=now)
            except Exception:
                # The clock-in already happened; the penalty is re-evaluated next time.
                logger.exception("auto-suspension check failed for user %s", user.user_id)

        return ClockInResult(shift=shift, created=True)

    def clock_out(self, shift_id: int, actor_id: int, *, now: Optional[datetime] = None) -> Shift:
        now = now or now_local()

        actor = self._users.get_by_id(int(actor_id))
        if not actor:
            raise AuthorizationError("Unauthorized")

        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError("Shift not found")

        if shift.user_id != actor.user_id and not actor.is_admin:
            raise AuthorizationError("Only the owner or admin can end this shift")
        if not shift.is_open:
            raise AlreadyClosedError("Shift has already been closed")

        self._shifts.set_clock_out(shift.shift_id, now)
        logger.info("shift %s clocked out by user %s", shift.shift_id, actor.user_id)
        return self._require(shift.shift_id)

    def update_shift(
        self,
        shift_id: int,
        *,
        actor_id: int,
        clock_in: Optional[datetime] = None,
        clock_out: Optional[datetime] = None,
    ) -> Shift:
        """Admin correction path: writes the given timestamps as-is, no policy checks."""
        actor = self._users.get_by_id(int(actor_id))
        if not actor or not actor.is_admin:
            raise AuthorizationError("Only admin can edit shifts")

        if not self._shifts.get_by_id(int(shift_id)):
            raise NotFoundError("Shift not found")

        self._shifts.update_times(int(shift_id), clock_in=clock_in, clock_out=clock_out)
        logger.info("shift %s corrected by admin %s", shift_id, actor.user_id)
        return self._require(int(shift_id))

    def list_all(self) -> Sequence[ShiftWithUser]:
        return self._shifts.list_with_users()

    def shifts_for_day(self, user_id: int, day: date) -> Sequence[Shift]:
        return self._shifts.list_for_user_between(int(user_id), start=start_of_day(day), end=end_of_day(day))

    def auto_close_shifts_for_date(self, day: date) -> int:
        """Close every shift still open from ``day`` at 23:00 that day.

        Shifts clocked in after 23:00 are left for the stale-shift lookup.
        """
        target = datetime.combine(day, AUTO_CLOSE_AT)
        closed = self._shifts.close_open_between(start=start_of_day(day), end=target, clock_out=target)
        logger.info("auto-close sweep for %s closed %d shift(s)", day.isoformat(), closed)
        return closed

    def _require(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")
        return shift
