from datetime import date, datetime, timedelta

import pytest

from hrm_system.attendance.model import TimeEntry
from hrm_system.core.enums import DeductionType, LeaveStatus, LeaveType
from hrm_system.core.exceptions import ValidationError
from hrm_system.employees.model import Employee
from hrm_system.leaves.model import LeaveRequest
from hrm_system.payroll.calculator.standard_calculator import HourlySalaryCalculator
from hrm_system.payroll.model import PayrollPeriod, PayrollSettings

EMPLOYEE = Employee(
    employee_id=1,
    first_name="John",
    last_name="Doe",
    email="john@test.com",
    join_date=date(2024, 1, 15),
    department="Engineering",
    employee_code="EMP-0001",
    standard_hours_per_day=8.0,
)
PERIOD = PayrollPeriod.from_month(2025, 6)


def _entry(day, total_hours, overtime_hours=0.0, *, employee_id=1, month=6, complete=True):
    work_date = date(2025, month, day)
    clock_in = datetime(2025, month, day, 9, 0)
    return TimeEntry(
        entry_id=day,
        employee_id=employee_id,
        work_date=work_date,
        clock_in=clock_in,
        clock_out=clock_in + timedelta(hours=total_hours) if complete else None,
        total_hours=total_hours if complete else None,
        overtime_hours=overtime_hours,
    )


def _leave(start, end, *, total_days, leave_type=LeaveType.UNPAID, status=LeaveStatus.APPROVED, employee_id=1):
    return LeaveRequest(
        request_id=1,
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        total_days=total_days,
        status=status,
    )


def _month_entries():
    # 20 working days of 8h (160h) of which two days carry 3h overtime each
    entries = [_entry(day, 8.0) for day in range(2, 22)]
    entries[0] = _entry(2, 8.0, 3.0)
    entries[1] = _entry(3, 8.0, 3.0)
    return entries


def _settings(**overrides):
    fields = dict(hourly_rate=10.0, overtime_multiplier=1.5, deduction_type=DeductionType.HOURLY)
    fields.update(overrides)
    return PayrollSettings(**fields)


def test_hourly_deduction_example():
    leaves = [_leave(date(2025, 6, 23), date(2025, 6, 23), total_days=1.0)]

    calc = HourlySalaryCalculator().calculate(EMPLOYEE, PERIOD, _month_entries(), leaves, _settings())

    assert calc.total_hours_worked == pytest.approx(160.0)
    assert calc.overtime_hours == pytest.approx(6.0)
    assert calc.unpaid_leave_days == 1.0
    assert calc.unpaid_leave_hours == 8.0
    assert calc.base_pay == pytest.approx(1600.0)
    assert calc.overtime_pay == pytest.approx(90.0)
    assert calc.gross_salary == pytest.approx(1690.0)
    assert calc.unpaid_leave_deduction == pytest.approx(80.0)
    assert calc.net_salary == pytest.approx(1610.0)
    assert calc.employee_name == "John Doe"
    assert calc.currency == "USD"


def test_daily_deduction_changes_only_the_deduction():
    leaves = [_leave(date(2025, 6, 23), date(2025, 6, 23), total_days=1.0)]
    hourly = HourlySalaryCalculator().calculate(EMPLOYEE, PERIOD, _month_entries(), leaves, _settings())

    daily = HourlySalaryCalculator().calculate(
        EMPLOYEE,
        PERIOD,
        _month_entries(),
        leaves,
        _settings(deduction_type=DeductionType.DAILY, daily_deduction_rate=50.0),
    )

    assert daily.unpaid_leave_deduction == pytest.approx(50.0)
    assert daily.net_salary == pytest.approx(1640.0)
    assert daily.base_pay == hourly.base_pay
    assert daily.overtime_pay == hourly.overtime_pay
    assert daily.gross_salary == hourly.gross_salary


@pytest.mark.parametrize("deduction_type", list(DeductionType))
def test_net_is_gross_minus_deduction(deduction_type):
    leaves = [_leave(date(2025, 6, 23), date(2025, 6, 25), total_days=3.0)]
    settings = _settings(hourly_rate=17.35, overtime_multiplier=1.75, deduction_type=deduction_type, daily_deduction_rate=123.4)

    calc = HourlySalaryCalculator().calculate(EMPLOYEE, PERIOD, _month_entries(), leaves, settings)

    assert calc.net_salary == calc.gross_salary - calc.unpaid_leave_deduction


def test_only_approved_unpaid_leave_of_the_employee_in_the_window_counts():
    leaves = [
        _leave(date(2025, 5, 30), date(2025, 6, 2), total_days=4.0),
        _leave(date(2025, 6, 10), date(2025, 6, 10), total_days=1.0, status=LeaveStatus.PENDING),
        _leave(date(2025, 6, 11), date(2025, 6, 11), total_days=1.0, status=LeaveStatus.REJECTED),
        _leave(date(2025, 6, 12), date(2025, 6, 12), total_days=1.0, leave_type=LeaveType.PAID),
        _leave(date(2025, 6, 13), date(2025, 6, 13), total_days=1.0, employee_id=2),
        _leave(date(2025, 7, 1), date(2025, 7, 1), total_days=1.0),
    ]

    calc = HourlySalaryCalculator().calculate(EMPLOYEE, PERIOD, [], leaves, _settings())

    assert calc.unpaid_leave_days == 4.0
    assert calc.base_pay == 0
    assert calc.net_salary == pytest.approx(-320.0)


def test_rows_outside_employee_period_or_incomplete_are_ignored():
    entries = [
        _entry(2, 8.0),
        _entry(3, 8.0, employee_id=2),
        _entry(1, 8.0, month=7),
        _entry(4, 8.0, complete=False),
    ]

    calc = HourlySalaryCalculator().calculate(EMPLOYEE, PERIOD, entries, [], _settings())

    assert calc.total_hours_worked == 8.0
    assert calc.net_salary == pytest.approx(80.0)


def test_period_validation():
    period = PayrollPeriod.from_month(2024, 2)
    assert (period.start, period.end) == (date(2024, 2, 1), date(2024, 2, 29))

    with pytest.raises(ValidationError):
        PayrollPeriod.from_month(2025, 0)
    with pytest.raises(ValidationError):
        PayrollPeriod.from_month(1999, 5)
