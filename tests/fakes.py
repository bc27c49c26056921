"""In-memory repositories shared by the service and API tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping, Optional

from werkzeug.security import generate_password_hash

from barbershop_pos.container import Container, wire
from barbershop_pos.core.enums import DayType, Role, UserStatus
from barbershop_pos.shifts.model import Shift, ShiftWithUser
from barbershop_pos.transactions.model import ClientServed, NewTransaction, Transaction, TransactionWithUser
from barbershop_pos.users.model import User


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._id = 0

    def add(
        self,
        full_name: str,
        *,
        username: Optional[str] = None,
        role: Role = Role.STAFF,
        pin: Optional[str] = None,
        status: UserStatus = UserStatus.ACTIVE,
        is_inactive: bool = False,
    ) -> User:
        self._id += 1
        user = User(
            user_id=self._id,
            username=username or full_name.lower(),
            full_name=full_name,
            role=role,
            pin_hash=generate_password_hash(pin) if pin else None,
            status=status,
            is_inactive=is_inactive,
        )
        self.users[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self.users.values(), key=lambda u: u.user_id)

    def create_user(self, *, username: str, full_name: str, role: Role, pin_hash: Optional[str]) -> int:
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id, username=username, full_name=full_name, role=role, pin_hash=pin_hash
        )
        return self._id

    def set_status(self, user_id: int, *, status: UserStatus, is_inactive: bool) -> bool:
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = replace(user, status=status, is_inactive=is_inactive)
        return True

    def reset_inactive(self) -> int:
        count = 0
        for user in list(self.users.values()):
            if user.is_inactive or user.status == UserStatus.SUSPENDED:
                self.users[user.user_id] = replace(user, status=UserStatus.ACTIVE, is_inactive=False)
                count += 1
        return count


class InMemoryShifts:
    def __init__(self, users: InMemoryUsers):
        self.shifts: dict[int, Shift] = {}
        self._users = users
        self._id = 0

    def add(self, user_id: int, clock_in: datetime, clock_out: Optional[datetime] = None) -> Shift:
        shift_id = self.create_open(user_id=user_id, clock_in=clock_in, is_late=False, day_type=DayType.WEEKDAY)
        if clock_out is not None:
            self.set_clock_out(shift_id, clock_out)
        return self.shifts[shift_id]

    def open_for(self, user_id: int):
        return [s for s in self.shifts.values() if s.user_id == user_id and s.clock_out is None]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    def get_latest_open_for_user(self, user_id: int) -> Optional[Shift]:
        open_shifts = self.open_for(user_id)
        return max(open_shifts, key=lambda s: s.clock_in) if open_shifts else None

    def create_open(self, *, user_id: int, clock_in: datetime, is_late: bool, day_type: DayType) -> int:
        self._id += 1
        self.shifts[self._id] = Shift(
            shift_id=self._id,
            user_id=user_id,
            clock_in=clock_in,
            clock_out=None,
            is_late=is_late,
            day_type=day_type,
        )
        return self._id

    def set_clock_out(self, shift_id: int, clock_out: datetime) -> bool:
        shift = self.shifts.get(shift_id)
        if not shift:
            return False
        self.shifts[shift_id] = replace(shift, clock_out=clock_out)
        return True

    def update_times(self, shift_id: int, *, clock_in=None, clock_out=None) -> bool:
        shift = self.shifts.get(shift_id)
        if not shift:
            return False
        if clock_in is not None:
            shift = replace(shift, clock_in=clock_in)
        if clock_out is not None:
            shift = replace(shift, clock_out=clock_out)
        self.shifts[shift_id] = shift
        return True

    def list_with_users(self):
        rows = [
            ShiftWithUser(shift=s, user=self._users.users[s.user_id])
            for s in self.shifts.values()
            if s.user_id in self._users.users
        ]
        rows.sort(key=lambda r: r.shift.clock_in, reverse=True)
        return rows

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime):
        return sorted(
            (s for s in self.shifts.values() if s.user_id == user_id and start <= s.clock_in <= end),
            key=lambda s: s.clock_in,
        )

    def close_open_between(self, *, start: datetime, end: datetime, clock_out: datetime) -> int:
        count = 0
        for shift in list(self.shifts.values()):
            if shift.clock_out is None and start <= shift.clock_in <= end:
                self.shifts[shift.shift_id] = replace(shift, clock_out=clock_out)
                count += 1
        return count


class InMemoryTransactions:
    def __init__(self, users: InMemoryUsers):
        self.transactions: dict[int, Transaction] = {}
        self._users = users
        self._id = 0

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.transactions.get(transaction_id)

    def create(self, new: NewTransaction, *, created_at: datetime) -> int:
        self._id += 1
        self.transactions[self._id] = Transaction(
            transaction_id=self._id,
            user_id=new.user_id,
            type=new.type,
            amount=new.amount,
            groomed_by=new.groomed_by,
            served_by=new.served_by,
            created_at=created_at,
            client_name=new.client_name,
            recipient=new.recipient,
            mpesa_ref=new.mpesa_ref,
            description=new.description,
        )
        return self._id

    def update_fields(self, transaction_id: int, fields: Mapping[str, Any]) -> bool:
        tx = self.transactions.get(transaction_id)
        if not tx:
            return False
        self.transactions[transaction_id] = replace(tx, **dict(fields))
        return True

    def delete_by_id(self, transaction_id: int) -> bool:
        return self.transactions.pop(transaction_id, None) is not None

    def _newest_first(self):
        return sorted(self.transactions.values(), key=lambda t: (t.created_at, t.transaction_id), reverse=True)

    def list_with_users(self):
        return [TransactionWithUser(transaction=t, user=self._users.get_by_id(t.user_id)) for t in self._newest_first()]

    def list_since(self, start: datetime):
        return sorted(
            (t for t in self.transactions.values() if t.created_at >= start),
            key=lambda t: (t.created_at, t.transaction_id),
        )

    def list_clients_served(self):
        return [
            ClientServed(created_at=t.created_at, client_name=t.client_name, served_by=t.served_by, groomed_by=t.groomed_by)
            for t in self._newest_first()
        ]


def make_container() -> Container:
    users = InMemoryUsers()
    return wire(
        users_repo=users,
        shifts_repo=InMemoryShifts(users),
        transactions_repo=InMemoryTransactions(users),
    )
