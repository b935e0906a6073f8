from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...attendance.model import TimeEntry
from ...employees.model import Employee
from ...leaves.model import LeaveRequest
from ..model import EmployeeSalaryCalculation, PayrollPeriod, PayrollSettings


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        employee: Employee,
        period: PayrollPeriod,
        entries: Iterable[TimeEntry],
        leaves: Iterable[LeaveRequest],
        settings: PayrollSettings,
    ) -> EmployeeSalaryCalculation:
        raise NotImplementedError
