from __future__ import annotations

from typing import Iterable

from ...attendance.model import TimeEntry
from ...core.enums import DeductionType, LeaveStatus, LeaveType
from ...employees.model import Employee
from ...leaves.model import LeaveRequest
from ..model import EmployeeSalaryCalculation, PayrollPeriod, PayrollSettings
from .base import SalaryCalculator


class HourlySalaryCalculator(SalaryCalculator):
    """Hourly rule: worked hours plus overtime premium, minus approved unpaid leave.

    Rows outside the employee or the period are ignored, as are open punches.
    """

    def calculate(
        self,
        employee: Employee,
        period: PayrollPeriod,
        entries: Iterable[TimeEntry],
        leaves: Iterable[LeaveRequest],
        settings: PayrollSettings,
    ) -> EmployeeSalaryCalculation:
        worked = [
            e
            for e in entries
            if e.employee_id == employee.employee_id and period.contains(e.work_date) and e.is_complete
        ]
        total_hours = round(sum(e.total_hours or 0.0 for e in worked), 2)
        overtime_hours = round(sum(e.overtime_hours for e in worked), 2)

        unpaid_days = sum(
            leave.total_days
            for leave in leaves
            if leave.employee_id == employee.employee_id
            and leave.leave_type == LeaveType.UNPAID
            and leave.status == LeaveStatus.APPROVED
            and leave.overlaps(period.start, period.end)
        )
        unpaid_hours = unpaid_days * employee.standard_hours_per_day

        base_pay = total_hours * settings.hourly_rate
        overtime_pay = overtime_hours * settings.hourly_rate * settings.overtime_multiplier
        gross = base_pay + overtime_pay

        if settings.deduction_type == DeductionType.DAILY:
            deduction = unpaid_days * settings.daily_deduction_rate
        else:
            deduction = unpaid_hours * settings.hourly_rate

        return EmployeeSalaryCalculation(
            employee_id=employee.employee_id,
            employee_name=employee.full_name,
            department=employee.department,
            employee_code=employee.employee_code,
            month=period.month,
            year=period.year,
            total_hours_worked=total_hours,
            overtime_hours=overtime_hours,
            unpaid_leave_days=unpaid_days,
            unpaid_leave_hours=unpaid_hours,
            base_pay=base_pay,
            overtime_pay=overtime_pay,
            gross_salary=gross,
            unpaid_leave_deduction=deduction,
            net_salary=gross - deduction,
            currency=settings.currency,
        )
