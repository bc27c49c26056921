from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import TransactionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..users.mysql_user_repository import row_to_user
from .model import ClientServed, NewTransaction, Transaction, TransactionWithUser
from .repository import UPDATABLE_FIELDS, TransactionRepository

_TX_COLUMNS = (
    "t.transaction_id, t.user_id, t.type, t.amount, t.client_name, t.groomed_by, "
    "t.served_by, t.recipient, t.mpesa_ref, t.description, t.created_at"
)


def row_to_transaction(r: dict) -> Transaction:
    return Transaction(
        transaction_id=int(r["transaction_id"]),
        user_id=int(r["user_id"]),
        type=TransactionType(r["type"]),
        amount=Decimal(str(r["amount"])),
        groomed_by=r["groomed_by"],
        served_by=r["served_by"],
        created_at=r["created_at"],
        client_name=r.get("client_name"),
        recipient=r.get("recipient"),
        mpesa_ref=r.get("mpesa_ref"),
        description=r.get("description"),
    )


class MySQLTransactionRepository(TransactionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TX_COLUMNS} FROM transactions t WHERE t.transaction_id=%s", (transaction_id,))
            r = fetchone(cur)
            return row_to_transaction(r) if r else None

    def create(self, new: NewTransaction, *, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO transactions(user_id, type, amount, client_name, groomed_by, served_by,
                                         recipient, mpesa_ref, description, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.user_id,
                    new.type.value,
                    new.amount,
                    new.client_name,
                    new.groomed_by,
                    new.served_by,
                    new.recipient,
                    new.mpesa_ref,
                    new.description,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def update_fields(self, transaction_id: int, fields: Mapping[str, Any]) -> bool:
        sets: list[str] = []
        params: list = []
        for name in UPDATABLE_FIELDS:
            if name not in fields:
                continue
            value = fields[name]
            if isinstance(value, TransactionType):
                value = value.value
            sets.append(f"{name}=%s")
            params.append(value)
        if not sets:
            return True

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE transactions SET {', '.join(sets)} WHERE transaction_id=%s",
                (*params, transaction_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, transaction_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM transactions WHERE transaction_id=%s", (transaction_id,))
            return cur.rowcount > 0

    def list_with_users(self) -> Sequence[TransactionWithUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TX_COLUMNS},
                       u.user_id AS u_user_id, u.username, u.full_name, u.role,
                       u.pin_hash, u.status, u.is_inactive
                FROM transactions t
                LEFT JOIN users u ON u.user_id = t.user_id
                ORDER BY t.created_at DESC
                """
            )
            out: list[TransactionWithUser] = []
            for r in fetchall(cur):
                user = row_to_user(r) if r.get("u_user_id") is not None else None
                out.append(TransactionWithUser(transaction=row_to_transaction(r), user=user))
            return out

    def list_since(self, start: datetime) -> Sequence[Transaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TX_COLUMNS}
                FROM transactions t
                WHERE t.created_at >= %s
                ORDER BY t.created_at
                """,
                (start,),
            )
            return [row_to_transaction(r) for r in fetchall(cur)]

    def list_clients_served(self) -> Sequence[ClientServed]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT created_at, client_name, served_by, groomed_by
                FROM transactions
                ORDER BY created_at DESC
                """
            )
            return [
                ClientServed(
                    created_at=r["created_at"],
                    client_name=r.get("client_name"),
                    served_by=r["served_by"],
                    groomed_by=r["groomed_by"],
                )
                for r in fetchall(cur)
            ]
