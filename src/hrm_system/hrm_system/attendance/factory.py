from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..employees.model import Employee
from .rules import is_early_leave, is_late
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_clock_in(self, *, clock_in: datetime, employee: Employee) -> AttendanceStrategy:
        if is_late(clock_in, employee.standard_shift_start):
            return LateStrategy()
        return NormalStrategy()

    def for_clock_out(self, *, clock_out: datetime, employee: Employee) -> AttendanceStrategy:
        if is_early_leave(clock_out, employee.standard_shift_end):
            return EarlyLeaveStrategy()
        return NormalStrategy()

    def decide(self, *, clock_in: datetime, clock_out: Optional[datetime], employee: Employee) -> StatusDecision:
        """Flags for a whole day: clock-in decision, then clock-out on top of it."""

        decision = self.for_clock_in(clock_in=clock_in, employee=employee).decide_clock_in(
            clock_in=clock_in, employee=employee
        )
        if clock_out is None:
            return decision
        return self.for_clock_out(clock_out=clock_out, employee=employee).decide_clock_out(
            clock_out=clock_out, employee=employee, current=decision
        )
