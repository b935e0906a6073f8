from __future__ import annotations

from datetime import datetime

from ...employees.model import Employee
from ..rules import late_by_minutes
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Clock-in after the standard shift start."""

    def decide_clock_in(self, *, clock_in: datetime, employee: Employee) -> StatusDecision:
        return StatusDecision(
            is_late=True,
            late_by_minutes=late_by_minutes(clock_in, employee.standard_shift_start),
        )

    def decide_clock_out(self, *, clock_out: datetime, employee: Employee, current: StatusDecision) -> StatusDecision:
        return current
