from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_datetime, month_bounds
from ..common.validators import parse_field, parse_optional, require_period, to_bool, to_float
from ..core.constants import MIN_PAYROLL_YEAR
from ..core.enums import DeductionType


@dataclass(frozen=True)
class PayrollSettings:
    """The company-wide pay rules. Exactly one active row exists."""

    hourly_rate: float
    overtime_multiplier: float = 1.5
    standard_working_days_per_month: int = 22
    deduction_type: DeductionType = DeductionType.HOURLY
    daily_deduction_rate: float = 0.0
    currency: str = "USD"
    settings_id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PayrollSettings":
        return cls(
            settings_id=parse_optional(row, "settings_id", int),
            hourly_rate=parse_field(row, "hourly_rate", to_float),
            overtime_multiplier=parse_field(row, "overtime_multiplier", to_float, default=1.5),
            standard_working_days_per_month=parse_field(row, "standard_working_days_per_month", int, default=22),
            deduction_type=parse_field(row, "deduction_type", DeductionType, default=DeductionType.HOURLY),
            daily_deduction_rate=parse_field(row, "daily_deduction_rate", to_float, default=0.0),
            currency=str(row.get("currency") or "USD").strip(),
        )

    def to_dict(self) -> dict:
        return {
            "settings_id": self.settings_id,
            "hourly_rate": self.hourly_rate,
            "overtime_multiplier": self.overtime_multiplier,
            "standard_working_days_per_month": self.standard_working_days_per_month,
            "deduction_type": self.deduction_type.value,
            "daily_deduction_rate": self.daily_deduction_rate,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class PayrollPeriod:
    year: int
    month: int
    start: date
    end: date

    @classmethod
    def from_month(cls, year: int, month: int) -> "PayrollPeriod":
        year, month = require_period(year, month, min_year=MIN_PAYROLL_YEAR)
        start, end = month_bounds(year, month)
        return cls(year=year, month=month, start=start, end=end)

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass(frozen=True)
class EmployeeSalaryCalculation:
    employee_id: int
    employee_name: str
    department: Optional[str]
    employee_code: Optional[str]
    month: int
    year: int
    total_hours_worked: float
    overtime_hours: float
    unpaid_leave_days: float
    unpaid_leave_hours: float
    base_pay: float
    overtime_pay: float
    gross_salary: float
    unpaid_leave_deduction: float
    net_salary: float
    currency: str

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "department": self.department,
            "employee_code": self.employee_code,
            "month": self.month,
            "year": self.year,
            "total_hours_worked": self.total_hours_worked,
            "overtime_hours": self.overtime_hours,
            "unpaid_leave_days": self.unpaid_leave_days,
            "unpaid_leave_hours": self.unpaid_leave_hours,
            "base_pay": round(self.base_pay, 2),
            "overtime_pay": round(self.overtime_pay, 2),
            "gross_salary": round(self.gross_salary, 2),
            "unpaid_leave_deduction": round(self.unpaid_leave_deduction, 2),
            "net_salary": round(self.net_salary, 2),
            "currency": self.currency,
        }


@dataclass(frozen=True)
class SalaryRecord:
    """A frozen pay snapshot for one employee and month."""

    employee_id: int
    period_month: int
    period_year: int
    total_hours_worked: float
    overtime_hours: float
    unpaid_leave_days: float
    base_pay: float
    overtime_pay: float
    allowances: float
    unpaid_leave_deduction: float
    other_deductions: float
    net_pay: float
    is_provisional: bool = False
    notes: Optional[str] = None
    record_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def gross_pay(self) -> float:
        return self.base_pay + self.overtime_pay + self.allowances

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SalaryRecord":
        money = {
            name: parse_field(row, name, to_float, default=0.0)
            for name in (
                "total_hours_worked",
                "overtime_hours",
                "unpaid_leave_days",
                "base_pay",
                "overtime_pay",
                "allowances",
                "unpaid_leave_deduction",
                "other_deductions",
                "net_pay",
            )
        }
        return cls(
            record_id=parse_optional(row, "record_id", int),
            employee_id=parse_field(row, "employee_id", int),
            period_month=parse_field(row, "period_month", int),
            period_year=parse_field(row, "period_year", int),
            is_provisional=parse_field(row, "is_provisional", to_bool, default=False),
            notes=row.get("notes") or None,
            created_at=parse_optional(row, "created_at", coerce_datetime),
            **money,
        )

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "employee_id": self.employee_id,
            "period_month": self.period_month,
            "period_year": self.period_year,
            "total_hours_worked": self.total_hours_worked,
            "overtime_hours": self.overtime_hours,
            "unpaid_leave_days": self.unpaid_leave_days,
            "base_pay": self.base_pay,
            "overtime_pay": self.overtime_pay,
            "allowances": self.allowances,
            "unpaid_leave_deduction": self.unpaid_leave_deduction,
            "other_deductions": self.other_deductions,
            "gross_pay": round(self.gross_pay, 2),
            "net_pay": self.net_pay,
            "is_provisional": self.is_provisional,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
