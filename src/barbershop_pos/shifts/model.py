from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import DayType
from ..users.model import User


@dataclass(frozen=True)
class Shift:
    """Domain entity: one continuous work session of a staff member.

    ``clock_out is None`` means the shift is open. ``is_late`` and ``day_type`` are
    fixed when the shift is created.
    """

    shift_id: int
    user_id: int
    clock_in: datetime
    clock_out: Optional[datetime]
    is_late: bool = False
    day_type: DayType = DayType.WEEKDAY

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "userId": self.user_id,
            "clockIn": to_iso(self.clock_in),
            "clockOut": to_iso(self.clock_out),
            "isLate": self.is_late,
            "dayType": self.day_type.value,
        }


@dataclass(frozen=True)
class ShiftWithUser:
    """Read-model for the admin shift list."""

    shift: Shift
    user: User

    def to_dict(self) -> dict:
        body = self.shift.to_dict()
        body["user"] = self.user.to_dict()
        return body
