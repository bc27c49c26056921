from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Iterable

from .model import Shift


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked(self, shift: Shift) -> timedelta:
        raise NotImplementedError

    def total(self, shifts: Iterable[Shift]) -> timedelta:
        return sum((self.worked(s) for s in shifts), timedelta())


class ClosedShiftCalculator(WorkedTimeCalculator):
    """Standard rule: clock_out - clock_in; a shift never closed counts as 0."""

    def worked(self, shift: Shift) -> timedelta:
        if shift.clock_out is None:
            return timedelta()
        return shift.clock_out - shift.clock_in
