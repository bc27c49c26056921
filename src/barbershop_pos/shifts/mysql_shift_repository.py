from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import DayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..users.mysql_user_repository import row_to_user
from .model import Shift, ShiftWithUser
from .repository import ShiftRepository

_SHIFT_COLUMNS = "s.shift_id, s.user_id, s.clock_in, s.clock_out, s.is_late, s.day_type"


def row_to_shift(row: dict) -> Shift:
    return Shift(
        shift_id=int(row["shift_id"]),
        user_id=int(row["user_id"]),
        clock_in=row["clock_in"],
        clock_out=row.get("clock_out"),
        is_late=bool(row.get("is_late", False)),
        day_type=DayType(row.get("day_type") or DayType.WEEKDAY.value),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHIFT_COLUMNS} FROM shifts s WHERE s.shift_id=%s", (shift_id,))
            r = fetchone(cur)
            return row_to_shift(r) if r else None

    def get_latest_open_for_user(self, user_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}
                FROM shifts s
                WHERE s.user_id=%s AND s.clock_out IS NULL
                ORDER BY s.clock_in DESC
                LIMIT 1
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return row_to_shift(r) if r else None

    def create_open(self, *, user_id: int, clock_in: datetime, is_late: bool, day_type: DayType) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(user_id, clock_in, clock_out, is_late, day_type)
                VALUES(%s,%s,NULL,%s,%s)
                """,
                (user_id, clock_in, int(is_late), day_type.value),
            )
            return int(cur.lastrowid)

    def set_clock_out(self, shift_id: int, clock_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shifts SET clock_out=%s WHERE shift_id=%s", (clock_out, shift_id))
            return cur.rowcount > 0

    def update_times(
        self,
        shift_id: int,
        *,
        clock_in: Optional[datetime] = None,
        clock_out: Optional[datetime] = None,
    ) -> bool:
        sets: list[str] = []
        params: list = []
        if clock_in is not None:
            sets.append("clock_in=%s")
            params.append(clock_in)
        if clock_out is not None:
            sets.append("clock_out=%s")
            params.append(clock_out)
        if not sets:
            return True

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE shifts SET {', '.join(sets)} WHERE shift_id=%s", (*params, shift_id))
            return cur.rowcount > 0

    def list_with_users(self) -> Sequence[ShiftWithUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS},
                       u.username, u.full_name, u.role, u.pin_hash, u.status, u.is_inactive
                FROM shifts s
                JOIN users u ON u.user_id = s.user_id
                ORDER BY s.clock_in DESC
                """
            )
            return [ShiftWithUser(shift=row_to_shift(r), user=row_to_user(r)) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}
                FROM shifts s
                WHERE s.user_id=%s AND s.clock_in BETWEEN %s AND %s
                ORDER BY s.clock_in
                """,
                (user_id, start, end),
            )
            return [row_to_shift(r) for r in fetchall(cur)]

    def close_open_between(self, *, start: datetime, end: datetime, clock_out: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET clock_out=%s
                WHERE clock_out IS NULL AND clock_in BETWEEN %s AND %s
                """,
                (clock_out, start, end),
            )
            return int(cur.rowcount)
