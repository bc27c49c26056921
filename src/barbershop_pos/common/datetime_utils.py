from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last stored instant of ``day`` (millisecond precision, 23:59:59.999)."""
    return datetime.combine(day, time(23, 59, 59, 999000))


def days_before(day: date, n: int) -> date:
    return day - timedelta(days=n)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Aware values (``Z`` or an offset) are converted to local time first.
    """
    if value is None or value == "":
        return None
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    parsed = datetime.fromisoformat(v)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def to_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")
