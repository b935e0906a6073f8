"""Monthly attendance aggregation and the dashboard feeds built on it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iter_days, month_bounds
from ..common.validators import require_period
from ..core.constants import DEFAULT_AVAILABLE_MONTHS, DEFAULT_RECENT_DAYS
from ..core.enums import DayStatus
from ..employees.model import Employee
from .classifier import classify_day
from .factory import AttendanceStrategyFactory
from .model import (
    AttendanceAnalytics,
    AttendanceOverviewStats,
    DailyLogEntry,
    TimeEntry,
    TodayAttendanceRecord,
)
from .rules import calculate_elapsed_hours


def build_monthly_attendance(
    employee: Employee,
    entries: Iterable[TimeEntry],
    *,
    year: int,
    month: int,
    today: date,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceAnalytics:
    year, month = require_period(year, month)
    start, end = month_bounds(year, month)

    by_date: dict[date, TimeEntry] = {}
    for entry in entries:
        if entry.employee_id == employee.employee_id and start <= entry.work_date <= end:
            by_date[entry.work_date] = entry

    present = absent = late = early = incomplete = not_applicable = 0
    total_hours = 0.0
    overtime_hours = 0.0
    daily: list[DailyLogEntry] = []

    for day in iter_days(start, end):
        log = classify_day(day, by_date.get(day), employee, today=today, factory=factory)
        daily.append(log)

        if log.status.counts_as_present:
            present += 1
            total_hours += log.total_hours or 0.0
            overtime_hours += log.overtime_hours
            if log.is_late:
                late += 1
            if log.is_early_leave:
                early += 1
        elif log.status == DayStatus.ABSENT:
            absent += 1
        elif log.status == DayStatus.INCOMPLETE:
            incomplete += 1
        else:
            not_applicable += 1

    return AttendanceAnalytics(
        employee_id=employee.employee_id,
        year=year,
        month=month,
        present_days=present,
        absent_days=absent,
        late_arrivals=late,
        early_leaves=early,
        incomplete_punches=incomplete,
        not_applicable_days=not_applicable,
        total_hours_worked=round(total_hours, 2),
        total_overtime_hours=round(overtime_hours, 2),
        average_hours_per_day=round(total_hours / present, 2) if present > 0 else 0.0,
        daily=daily,
    )


def build_heatmap(analytics: AttendanceAnalytics) -> list[list[Optional[DailyLogEntry]]]:
    """Calendar grid for the month: weeks start on Sunday, padding cells are None."""

    if not analytics.daily:
        return []

    first = analytics.daily[0].work_date
    leading = (first.weekday() + 1) % 7
    cells: list[Optional[DailyLogEntry]] = [None] * leading + list(analytics.daily)
    if len(cells) % 7:
        cells.extend([None] * (7 - len(cells) % 7))
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


@dataclass(frozen=True)
class TodayOverview:
    records: list[TodayAttendanceRecord]
    stats: AttendanceOverviewStats


def _matches_search(employee: Employee, search: str) -> bool:
    needle = search.strip().lower()
    return needle in employee.full_name.lower() or needle in (employee.employee_code or "").lower()


def build_today_overview(
    employees: Iterable[Employee],
    entries: Iterable[TimeEntry],
    *,
    today: date,
    now: datetime,
    department: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[DayStatus] = None,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> TodayOverview:
    """Admin board of today's punches for active, non-admin employees.

    An open punch is reported as ``incomplete`` with its live elapsed hours;
    it still counts as present today.
    """

    factory = factory or AttendanceStrategyFactory()
    by_employee = {e.employee_id: e for e in entries if e.work_date == today}

    staff = [emp for emp in employees if emp.is_active and not emp.is_admin]
    if department:
        staff = [emp for emp in staff if emp.department == department]
    if search and search.strip():
        staff = [emp for emp in staff if _matches_search(emp, search)]

    records: list[TodayAttendanceRecord] = []
    present = absent = late = early = incomplete = 0

    for employee in staff:
        entry = by_employee.get(employee.employee_id)
        if entry is None or entry.clock_in is None:
            absent += 1
            records.append(
                TodayAttendanceRecord(
                    employee_id=employee.employee_id,
                    employee_name=employee.full_name,
                    department=employee.department,
                    status=DayStatus.ABSENT,
                    is_late=False,
                    is_early_leave=False,
                    total_hours=None,
                )
            )
            continue

        present += 1
        if entry.clock_out is None:
            incomplete += 1
            decision = factory.decide(clock_in=entry.clock_in, clock_out=None, employee=employee)
            day_status = DayStatus.INCOMPLETE
            is_late, is_early = decision.is_late, decision.is_early_leave
            hours = calculate_elapsed_hours(entry.clock_in, now)
        else:
            log = classify_day(today, entry, employee, today=today, factory=factory)
            day_status = log.status
            is_late, is_early = log.is_late, log.is_early_leave
            hours = log.total_hours

        late += 1 if is_late else 0
        early += 1 if is_early else 0
        records.append(
            TodayAttendanceRecord(
                employee_id=employee.employee_id,
                employee_name=employee.full_name,
                department=employee.department,
                status=day_status,
                is_late=is_late,
                is_early_leave=is_early,
                total_hours=hours,
                entry=entry,
            )
        )

    stats = AttendanceOverviewStats(
        total_employees=len(staff),
        present_today=present,
        absent_today=absent,
        late_arrivals=late,
        early_leaves=early,
        incomplete_punches=incomplete,
    )
    if status is not None:
        records = [r for r in records if r.status == status]
    return TodayOverview(records=records, stats=stats)


def recent_attendance(entries: Iterable[TimeEntry], *, limit: int = DEFAULT_RECENT_DAYS) -> list[TimeEntry]:
    return sorted(entries, key=lambda e: e.work_date, reverse=True)[: max(0, int(limit))]


def available_months(
    entries: Sequence[TimeEntry],
    *,
    today: date,
    limit: int = DEFAULT_AVAILABLE_MONTHS,
) -> list[tuple[int, int]]:
    """Distinct (year, month) pairs with attendance data, newest first."""

    months = sorted({(e.work_date.year, e.work_date.month) for e in entries}, reverse=True)
    if not months:
        return [(today.year, today.month)]
    return months[:limit]
