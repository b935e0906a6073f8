from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ...employees.model import Employee
from .base import AttendanceStrategy, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Clock-out before the standard shift end; keeps any lateness flag."""

    def decide_clock_in(self, *, clock_in: datetime, employee: Employee) -> StatusDecision:
        return StatusDecision()

    def decide_clock_out(self, *, clock_out: datetime, employee: Employee, current: StatusDecision) -> StatusDecision:
        return replace(current, is_early_leave=True)
