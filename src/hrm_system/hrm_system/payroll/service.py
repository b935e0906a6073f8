from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import TimeEntryRepository
from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus
from ..core.exceptions import DuplicateRecordError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import HourlySalaryCalculator
from .model import EmployeeSalaryCalculation, PayrollPeriod, PayrollSettings, SalaryRecord
from .repository import PayrollSettingsRepository, SalaryRecordRepository

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        settings: PayrollSettingsRepository,
        salary_records: SalaryRecordRepository,
        employees: EmployeeRepository,
        time_entries: TimeEntryRepository,
        leaves: LeaveRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._settings = settings
        self._records = salary_records
        self._employees = employees
        self._entries = time_entries
        self._leaves = leaves
        self._calculator = calculator or HourlySalaryCalculator()
        self._clock = clock

    def _require_settings(self) -> PayrollSettings:
        settings = self._settings.get_active()
        if settings is None:
            raise NotFoundError("Payroll settings have not been configured")
        return settings

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def calculate_for_employee(self, employee_id: int, *, year: int, month: int) -> EmployeeSalaryCalculation:
        period = PayrollPeriod.from_month(year, month)
        settings = self._require_settings()
        employee = self._require_employee(employee_id)

        entries = self._entries.list_for_employee(employee.employee_id, start_date=period.start, end_date=period.end)
        leaves = self._leaves.list_overlapping(
            start_date=period.start,
            end_date=period.end,
            employee_id=employee.employee_id,
            status=LeaveStatus.APPROVED,
        )
        return self._calculator.calculate(employee, period, entries, leaves, settings)

    def calculate_for_all(self, *, year: int, month: int) -> list[EmployeeSalaryCalculation]:
        """Live pay breakdown for every active employee, by name."""

        period = PayrollPeriod.from_month(year, month)
        settings = self._require_settings()

        entries_by_employee = defaultdict(list)
        for e in self._entries.list_for_period(start_date=period.start, end_date=period.end):
            entries_by_employee[e.employee_id].append(e)

        leaves_by_employee = defaultdict(list)
        for leave in self._leaves.list_overlapping(
            start_date=period.start, end_date=period.end, status=LeaveStatus.APPROVED
        ):
            leaves_by_employee[leave.employee_id].append(leave)

        results = [
            self._calculator.calculate(
                employee,
                period,
                entries_by_employee[employee.employee_id],
                leaves_by_employee[employee.employee_id],
                settings,
            )
            for employee in self._employees.list_active()
        ]
        results.sort(key=lambda c: c.employee_name.lower())
        return results

    def snapshot_salary(self, employee_id: int, year: int, month: int, *, today: Optional[date] = None) -> SalaryRecord:
        """Freeze the live calculation for a period into the salary ledger.

        A period that already has a record is returned unchanged.
        """

        period = PayrollPeriod.from_month(year, month)
        existing = self._records.get_for_period(int(employee_id), period.year, period.month)
        if existing is not None:
            return existing

        today = today or self._clock().date()
        calc = self.calculate_for_employee(employee_id, year=period.year, month=period.month)
        is_provisional = period.contains(today)
        record = SalaryRecord(
            employee_id=calc.employee_id,
            period_month=period.month,
            period_year=period.year,
            total_hours_worked=calc.total_hours_worked,
            overtime_hours=calc.overtime_hours,
            unpaid_leave_days=calc.unpaid_leave_days,
            base_pay=round(calc.base_pay, 2),
            overtime_pay=round(calc.overtime_pay, 2),
            allowances=0.0,
            unpaid_leave_deduction=round(calc.unpaid_leave_deduction, 2),
            other_deductions=0.0,
            net_pay=round(calc.net_salary, 2),
            is_provisional=is_provisional,
        )
        try:
            record_id = self._records.insert(record)
        except DuplicateRecordError:
            # a concurrent snapshot of the same period won the insert
            logger.info(
                "salary_snapshot_already_recorded",
                extra={"employee_id": calc.employee_id, "period": f"{period.year}-{period.month:02d}"},
            )
            return self._require_record(calc.employee_id, period)

        logger.info(
            "salary_snapshot_created",
            extra={
                "record_id": record_id,
                "employee_id": calc.employee_id,
                "period": f"{period.year}-{period.month:02d}",
                "net_pay": record.net_pay,
                "is_provisional": is_provisional,
            },
        )

        return self._require_record(calc.employee_id, period)

    def _require_record(self, employee_id: int, period: PayrollPeriod) -> SalaryRecord:
        stored = self._records.get_for_period(employee_id, period.year, period.month)
        if stored is None:
            raise NotFoundError(f"Salary record for employee {employee_id} in {period.year}-{period.month:02d} not found")
        return stored

    def salary_history(self, employee_id: int) -> list[SalaryRecord]:
        employee = self._require_employee(employee_id)
        return list(self._records.list_for_employee(employee.employee_id))
