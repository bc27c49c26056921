"""Shop calendar: which moments count as late, weekend or holiday.

All functions are pure and take naive local datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..core.constants import (
    LATE_GRACE_MINUTES,
    LOGIN_OPENS_AT,
    PUBLIC_HOLIDAYS,
    WEEKDAY_START,
    WEEKEND_START,
)
from ..core.enums import DayType


def is_weekend(t: datetime) -> bool:
    # Monday == 0 ... Saturday == 5, Sunday == 6
    return t.weekday() >= 5


def is_holiday(t: datetime) -> bool:
    return (t.month, t.day) in PUBLIC_HOLIDAYS


def scheduled_start(t: datetime) -> datetime:
    start = WEEKEND_START if is_weekend(t) or is_holiday(t) else WEEKDAY_START
    return datetime.combine(t.date(), start)


def is_late_arrival(t: datetime) -> bool:
    return t > scheduled_start(t) + timedelta(minutes=LATE_GRACE_MINUTES)


def day_type(t: datetime) -> DayType:
    """Holidays are stored as weekend days; HOLIDAY is never produced here."""
    if is_weekend(t) or is_holiday(t):
        return DayType.WEEKEND
    return DayType.WEEKDAY


def is_before_login_opening(t: datetime) -> bool:
    return t.time() < LOGIN_OPENS_AT
