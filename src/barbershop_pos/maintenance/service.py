from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.policy import AttendancePolicy
from ..common.datetime_utils import days_before, now_local
from ..shifts.service import ShiftLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaintenanceReport:
    swept_date: date
    shifts_closed: int
    users_reset: int


class MaintenanceService:
    """Daily sweep meant to run shortly after midnight from a scheduler (cron).

    Closes shifts left open on the previous day and clears every away/suspended
    flag so staff can log in again.
    """

    def __init__(self, shifts: ShiftLedger, policy: AttendancePolicy):
        self._shifts = shifts
        self._policy = policy

    def run_daily(self, *, now: Optional[datetime] = None) -> MaintenanceReport:
        now = now or now_local()
        swept = days_before(now.date(), 1)

        closed = self._shifts.auto_close_shifts_for_date(swept)
        reset = self._policy.reset_inactive_users()
        logger.info("daily maintenance for %s: %d shift(s) closed, %d user(s) reset", swept, closed, reset)
        return MaintenanceReport(swept_date=swept, shifts_closed=closed, users_reset=reset)
