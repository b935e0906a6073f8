from __future__ import annotations

from datetime import datetime

from ...employees.model import Employee
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in, clock-out at or after shift end."""

    def decide_clock_in(self, *, clock_in: datetime, employee: Employee) -> StatusDecision:
        return StatusDecision()

    def decide_clock_out(self, *, clock_out: datetime, employee: Employee, current: StatusDecision) -> StatusDecision:
        return current
