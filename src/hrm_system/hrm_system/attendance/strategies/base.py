from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...employees.model import Employee


@dataclass(frozen=True)
class StatusDecision:
    is_late: bool = False
    is_early_leave: bool = False
    late_by_minutes: int = 0


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a punch affects the day's flags."""

    @abstractmethod
    def decide_clock_in(self, *, clock_in: datetime, employee: Employee) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_clock_out(self, *, clock_out: datetime, employee: Employee, current: StatusDecision) -> StatusDecision:
        raise NotImplementedError
