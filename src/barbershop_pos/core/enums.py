from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class UserStatus(str, Enum):
    """Attendance flag. Only ACTIVE permits a staff login."""

    ACTIVE = "active"
    AWAY = "away"
    SUSPENDED = "suspended"


class DayType(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class TransactionType(str, Enum):
    CASH = "cash"
    MPESA = "mpesa"
    WITHDRAWAL = "withdrawal"

    @property
    def needs_recipient(self) -> bool:
        return self in (TransactionType.MPESA, TransactionType.WITHDRAWAL)


class PolicyBlockReason(str, Enum):
    """Why the attendance rules refused a login."""

    OUTSIDE_HOURS = "OutsideHours"
    SUSPENDED = "Suspended"
    REST_DAY = "RestDay"
    SHIFT_ENDED = "ShiftEnded"
