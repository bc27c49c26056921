from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from barbershop_pos.core.enums import DayType, Role
from barbershop_pos.core.exceptions import (
    AlreadyClosedError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from barbershop_pos.shifts.calculator import ClosedShiftCalculator
from barbershop_pos.shifts.model import Shift
from barbershop_pos.shifts.service import ShiftLedger
from tests.fakes import InMemoryShifts, InMemoryUsers

WEDNESDAY = datetime(2026, 10, 14, 8, 5)


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def shifts(users):
    return InMemoryShifts(users)


@pytest.fixture
def ledger(users, shifts):
    return ShiftLedger(shifts, users)


def test_clock_in_creates_open_on_time_weekday_shift(users, ledger):
    jay = users.add("Jay")

    result = ledger.clock_in(jay.user_id, now=WEDNESDAY)

    assert result.created
    assert result.shift.is_open
    assert result.shift.is_late is False
    assert result.shift.day_type == DayType.WEEKDAY
    assert result.shift.clock_in == WEDNESDAY


def test_clock_in_after_grace_is_late(users, ledger):
    jay = users.add("Jay")

    result = ledger.clock_in(jay.user_id, now=datetime(2026, 10, 14, 8, 21))

    assert result.shift.is_late is True


def test_clock_in_on_saturday_is_weekend_and_on_time_at_nine(users, ledger):
    jay = users.add("Jay")

    result = ledger.clock_in(jay.user_id, now=datetime(2026, 10, 17, 9, 10))

    assert result.shift.day_type == DayType.WEEKEND
    assert result.shift.is_late is False


def test_clock_in_is_idempotent_while_shift_open(users, shifts, ledger):
    jay = users.add("Jay")

    first = ledger.clock_in(jay.user_id, now=WEDNESDAY)
    second = ledger.clock_in(jay.user_id, now=WEDNESDAY + timedelta(hours=2))

    assert second.created is False
    assert second.shift.shift_id == first.shift.shift_id
    assert len(shifts.open_for(jay.user_id)) == 1


def test_clock_in_rejects_unknown_user_and_admin(users, ledger):
    admin = users.add("Admin", role=Role.ADMIN)

    with pytest.raises(NotFoundError):
        ledger.clock_in(999, now=WEDNESDAY)
    with pytest.raises(ValidationError):
        ledger.clock_in(admin.user_id, now=WEDNESDAY)


def test_stale_shift_from_yesterday_is_closed_at_end_of_that_day(users, shifts, ledger):
    jay = users.add("Jay")
    stale = shifts.add(jay.user_id, datetime(2026, 10, 13, 8, 0))

    active = ledger.get_active_shift(jay.user_id, now=WEDNESDAY)

    assert active is None
    closed = shifts.get_by_id(stale.shift_id)
    assert closed.clock_out == datetime(2026, 10, 13, 23, 59, 59, 999000)


def test_clock_in_after_stale_shift_leaves_single_open_shift(users, shifts, ledger):
    jay = users.add("Jay")
    stale = shifts.add(jay.user_id, datetime(2026, 10, 12, 8, 0))

    result = ledger.clock_in(jay.user_id, now=WEDNESDAY)

    assert result.created
    assert result.shift.shift_id != stale.shift_id
    assert [s.shift_id for s in shifts.open_for(jay.user_id)] == [result.shift.shift_id]


def test_get_active_shift_returns_todays_open_shift(users, shifts, ledger):
    jay = users.add("Jay")
    today = shifts.add(jay.user_id, datetime(2026, 10, 14, 8, 0))

    assert ledger.get_active_shift(jay.user_id, now=WEDNESDAY) == today


def test_owner_can_clock_out(users, ledger):
    jay = users.add("Jay")
    shift = ledger.clock_in(jay.user_id, now=WEDNESDAY).shift
    later = WEDNESDAY + timedelta(hours=11)

    closed = ledger.clock_out(shift.shift_id, jay.user_id, now=later)

    assert closed.clock_out == later


def test_admin_can_clock_out_someone_else(users, ledger):
    jay = users.add("Jay")
    admin = users.add("Admin", role=Role.ADMIN)
    shift = ledger.clock_in(jay.user_id, now=WEDNESDAY).shift

    closed = ledger.clock_out(shift.shift_id, admin.user_id, now=WEDNESDAY + timedelta(hours=1))

    assert not closed.is_open


def test_other_staff_cannot_clock_out(users, shifts, ledger):
    jay = users.add("Jay")
    cate = users.add("Cate")
    shift = ledger.clock_in(jay.user_id, now=WEDNESDAY).shift

    with pytest.raises(AuthorizationError):
        ledger.clock_out(shift.shift_id, cate.user_id, now=WEDNESDAY)
    assert shifts.get_by_id(shift.shift_id).is_open


def test_clock_out_unknown_actor_or_shift(users, ledger):
    jay = users.add("Jay")

    with pytest.raises(AuthorizationError):
        ledger.clock_out(1, 999, now=WEDNESDAY)
    with pytest.raises(NotFoundError):
        ledger.clock_out(12345, jay.user_id, now=WEDNESDAY)


def test_clock_out_twice_fails_with_already_closed(users, ledger):
    jay = users.add("Jay")
    shift = ledger.clock_in(jay.user_id, now=WEDNESDAY).shift
    first_out = WEDNESDAY + timedelta(hours=3)
    ledger.clock_out(shift.shift_id, jay.user_id, now=first_out)

    with pytest.raises(AlreadyClosedError):
        ledger.clock_out(shift.shift_id, jay.user_id, now=first_out + timedelta(hours=1))


def test_update_shift_overwrites_without_validation(users, shifts, ledger):
    jay = users.add("Jay")
    admin = users.add("Admin", role=Role.ADMIN)
    shift = shifts.add(jay.user_id, datetime(2026, 10, 14, 8, 0))

    # clock_out before clock_in is accepted on the correction path
    updated = ledger.update_shift(shift.shift_id, actor_id=admin.user_id, clock_out=datetime(2026, 10, 14, 7, 0))

    assert updated.clock_out == datetime(2026, 10, 14, 7, 0)
    assert updated.clock_in == datetime(2026, 10, 14, 8, 0)


def test_update_shift_requires_admin_and_existing_shift(users, shifts, ledger):
    jay = users.add("Jay")
    admin = users.add("Admin", role=Role.ADMIN)
    shift = shifts.add(jay.user_id, datetime(2026, 10, 14, 8, 0))

    with pytest.raises(AuthorizationError):
        ledger.update_shift(shift.shift_id, actor_id=jay.user_id, clock_in=datetime(2026, 10, 14, 9, 0))
    with pytest.raises(NotFoundError):
        ledger.update_shift(999, actor_id=admin.user_id, clock_in=datetime(2026, 10, 14, 9, 0))


def test_list_all_is_newest_first_with_user(users, shifts, ledger):
    jay = users.add("Jay")
    cate = users.add("Cate")
    shifts.add(jay.user_id, datetime(2026, 10, 13, 8, 0), datetime(2026, 10, 13, 19, 0))
    shifts.add(cate.user_id, datetime(2026, 10, 14, 8, 0))

    rows = ledger.list_all()

    assert [r.user.full_name for r in rows] == ["Cate", "Jay"]


def test_auto_close_sweep_closes_that_days_open_shifts_at_2300(users, shifts, ledger):
    jay = users.add("Jay")
    cate = users.add("Cate")
    day = date(2026, 10, 13)
    open_one = shifts.add(jay.user_id, datetime(2026, 10, 13, 8, 0))
    already_closed = shifts.add(cate.user_id, datetime(2026, 10, 13, 8, 0), datetime(2026, 10, 13, 20, 0))
    other_day = shifts.add(cate.user_id, datetime(2026, 10, 14, 8, 0))

    closed = ledger.auto_close_shifts_for_date(day)

    assert closed == 1
    assert shifts.get_by_id(open_one.shift_id).clock_out == datetime.combine(day, time(23, 0))
    assert shifts.get_by_id(already_closed.shift_id).clock_out == datetime(2026, 10, 13, 20, 0)
    assert shifts.get_by_id(other_day.shift_id).is_open


def test_closed_shift_calculator_counts_open_shift_as_zero():
    calc = ClosedShiftCalculator()
    open_shift = Shift(shift_id=1, user_id=1, clock_in=datetime(2026, 10, 13, 8, 0), clock_out=None)
    closed = Shift(
        shift_id=2,
        user_id=1,
        clock_in=datetime(2026, 10, 13, 8, 0),
        clock_out=datetime(2026, 10, 13, 13, 30),
    )

    assert calc.worked(open_shift) == timedelta()
    assert calc.total([open_shift, closed]) == timedelta(hours=5, minutes=30)
