from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, username, full_name, role, pin_hash, status, is_inactive"


def row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        full_name=row["full_name"],
        role=Role(row["role"]),
        pin_hash=row.get("pin_hash"),
        status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
        is_inactive=bool(row.get("is_inactive", False)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY user_id")
            return [row_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        username: str,
        full_name: str,
        role: Role,
        pin_hash: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, full_name, role, pin_hash, status, is_inactive)
                VALUES(%s,%s,%s,%s,'active',0)
                """,
                (username, full_name, role.value, pin_hash),
            )
            return int(cur.lastrowid)

    def set_status(self, user_id: int, *, status: UserStatus, is_inactive: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET status=%s, is_inactive=%s WHERE user_id=%s",
                (status.value, int(is_inactive), user_id),
            )
            # MySQL reports 0 affected rows when values are unchanged; treat existence as success.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (user_id,))
            return fetchone(cur) is not None

    def reset_inactive(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET status='active', is_inactive=0
                WHERE is_inactive=1 OR status='suspended'
                """
            )
            return int(cur.rowcount)
