from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import DayType
from .model import Shift, ShiftWithUser


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_latest_open_for_user(self, user_id: int) -> Optional[Shift]:
        """Most recent (by clock_in) shift of the user with no clock_out."""

        raise NotImplementedError

    def create_open(self, *, user_id: int, clock_in: datetime, is_late: bool, day_type: DayType) -> int:
        raise NotImplementedError

    def set_clock_out(self, shift_id: int, clock_out: datetime) -> bool:
        raise NotImplementedError

    def update_times(
        self,
        shift_id: int,
        *,
        clock_in: Optional[datetime] = None,
        clock_out: Optional[datetime] = None,
    ) -> bool:
        """Admin override; only the given fields are written."""

        raise NotImplementedError

    def list_with_users(self) -> Sequence[ShiftWithUser]:
        """All shifts newest-first, joined with their owner."""

        raise NotImplementedError

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime) -> Sequence[Shift]:
        """Shifts of the user whose clock_in is within [start, end]."""

        raise NotImplementedError

    def close_open_between(self, *, start: datetime, end: datetime, clock_out: datetime) -> int:
        """Close open shifts whose clock_in is within [start, end]; returns count."""

        raise NotImplementedError
