"""Canned salary history for demo databases.

Independent of HourlySalaryCalculator: rows come from a fixed monthly package
(base 5000, allowances 200, 10% other deductions), not from attendance data.
"""

from __future__ import annotations

import random
from datetime import date

from .model import SalaryRecord

DEMO_BASE_PAY = 5000.0
DEMO_WORKING_DAYS = 22
DEMO_HOURS_PER_DAY = 8
DEMO_OVERTIME_MULTIPLIER = 1.5
DEMO_ALLOWANCES = 200.0
DEMO_OTHER_DEDUCTION_RATE = 0.1
DEMO_MONTHS = 3

PROVISIONAL_NOTE = "This period is still in progress. Final salary may change."


def _months_back(today: date, count: int) -> list[tuple[int, int]]:
    """(year, month) pairs, oldest first, ending with today's month."""
    out = []
    for back in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - back
        out.append((index // 12, index % 12 + 1))
    return out


def build_demo_salary_record(employee_id: int, year: int, month: int, *, rng: random.Random, is_provisional: bool) -> SalaryRecord:
    days_present = DEMO_WORKING_DAYS - 2 + rng.randint(0, 1)
    days_absent = DEMO_WORKING_DAYS - days_present
    # One absence is covered by paid leave, the rest is unpaid.
    unpaid_days = days_absent - min(days_absent, 1)

    scheduled_hours = days_present * DEMO_HOURS_PER_DAY
    total_hours = scheduled_hours + rng.random() * 10
    overtime_hours = max(0.0, total_hours - scheduled_hours)

    hourly_rate = DEMO_BASE_PAY / (DEMO_WORKING_DAYS * DEMO_HOURS_PER_DAY)
    overtime_pay = overtime_hours * hourly_rate * DEMO_OVERTIME_MULTIPLIER
    unpaid_deduction = unpaid_days * (DEMO_BASE_PAY / DEMO_WORKING_DAYS)
    other_deductions = DEMO_BASE_PAY * DEMO_OTHER_DEDUCTION_RATE
    net_pay = DEMO_BASE_PAY + overtime_pay + DEMO_ALLOWANCES - unpaid_deduction - other_deductions

    return SalaryRecord(
        employee_id=int(employee_id),
        period_month=month,
        period_year=year,
        total_hours_worked=round(total_hours, 2),
        overtime_hours=round(overtime_hours, 2),
        unpaid_leave_days=float(unpaid_days),
        base_pay=round(DEMO_BASE_PAY, 2),
        overtime_pay=round(overtime_pay, 2),
        allowances=round(DEMO_ALLOWANCES, 2),
        unpaid_leave_deduction=round(unpaid_deduction, 2),
        other_deductions=round(other_deductions, 2),
        net_pay=round(net_pay, 2),
        is_provisional=is_provisional,
        notes=PROVISIONAL_NOTE if is_provisional else None,
    )


def build_demo_salary_records(employee_id: int, *, today: date, rng: random.Random | None = None) -> list[SalaryRecord]:
    """Three months of demo records ending with the (provisional) current month."""
    rng = rng or random.Random()
    periods = _months_back(today, DEMO_MONTHS)
    return [
        build_demo_salary_record(
            employee_id,
            year,
            month,
            rng=rng,
            is_provisional=(year, month) == (today.year, today.month),
        )
        for year, month in periods
    ]
