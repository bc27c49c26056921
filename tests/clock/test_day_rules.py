from datetime import datetime

import pytest

from barbershop_pos.clock import day_rules
from barbershop_pos.core.enums import DayType


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2026, 10, 12, 10, 0), False),  # Monday
        (datetime(2026, 10, 16, 10, 0), False),  # Friday
        (datetime(2026, 10, 17, 10, 0), True),  # Saturday
        (datetime(2026, 10, 18, 10, 0), True),  # Sunday
    ],
)
def test_is_weekend_only_saturday_and_sunday(moment, expected):
    assert day_rules.is_weekend(moment) is expected


@pytest.mark.parametrize("year", [1999, 2025, 2026, 2040])
def test_holidays_are_year_independent(year):
    for month, day in [(12, 12), (6, 1), (10, 20), (5, 1)]:
        assert day_rules.is_holiday(datetime(year, month, day, 12, 0))


def test_other_days_are_not_holidays():
    assert not day_rules.is_holiday(datetime(2026, 12, 25, 12, 0))
    assert not day_rules.is_holiday(datetime(2026, 6, 2, 12, 0))


def test_scheduled_start_weekday_weekend_and_holiday():
    assert day_rules.scheduled_start(datetime(2026, 10, 14, 15, 0)) == datetime(2026, 10, 14, 8, 0)
    assert day_rules.scheduled_start(datetime(2026, 10, 17, 15, 0)) == datetime(2026, 10, 17, 9, 0)
    # 1 June 2026 is a Monday holiday
    assert day_rules.scheduled_start(datetime(2026, 6, 1, 15, 0)) == datetime(2026, 6, 1, 9, 0)


def test_weekday_grace_period_boundary():
    assert not day_rules.is_late_arrival(datetime(2026, 10, 14, 8, 20, 0))
    assert day_rules.is_late_arrival(datetime(2026, 10, 14, 8, 20, 1))


def test_weekend_and_holiday_grace_end_at_nine_twenty():
    assert not day_rules.is_late_arrival(datetime(2026, 10, 17, 9, 15))
    assert day_rules.is_late_arrival(datetime(2026, 10, 17, 9, 21))
    assert not day_rules.is_late_arrival(datetime(2026, 6, 1, 9, 20))
    assert day_rules.is_late_arrival(datetime(2026, 6, 1, 9, 25))


def test_day_type_folds_holiday_into_weekend():
    assert day_rules.day_type(datetime(2026, 10, 14, 9, 0)) == DayType.WEEKDAY
    assert day_rules.day_type(datetime(2026, 10, 18, 9, 0)) == DayType.WEEKEND
    assert day_rules.day_type(datetime(2026, 6, 1, 9, 0)) == DayType.WEEKEND


def test_login_opening_is_seven_every_day():
    assert day_rules.is_before_login_opening(datetime(2026, 10, 14, 6, 59, 59))
    assert not day_rules.is_before_login_opening(datetime(2026, 10, 14, 7, 0))
    assert day_rules.is_before_login_opening(datetime(2026, 10, 18, 6, 30))
