from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import DayStatus
from ..employees.model import Employee
from .factory import AttendanceStrategyFactory
from .model import DailyLogEntry, TimeEntry
from .rules import calculate_overtime_hours, calculate_total_hours

_DEFAULT_FACTORY = AttendanceStrategyFactory()


def day_label(work_date: date) -> str:
    return work_date.strftime("%a, %d %b %Y")


def classify_day(
    work_date: date,
    entry: Optional[TimeEntry],
    employee: Employee,
    *,
    today: date,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> DailyLogEntry:
    """Derive one day's attendance status.

    Precedence: not applicable (before join date or after today), absent,
    incomplete punch, then late / early leave / both / present.
    """

    factory = factory or _DEFAULT_FACTORY
    label = day_label(work_date)

    if work_date < employee.join_date or work_date > today:
        return DailyLogEntry(work_date=work_date, day_name=label, status=DayStatus.NOT_APPLICABLE)

    if entry is None or entry.clock_in is None:
        return DailyLogEntry(work_date=work_date, day_name=label, status=DayStatus.ABSENT)

    if entry.clock_out is None:
        return DailyLogEntry(
            work_date=work_date,
            day_name=label,
            status=DayStatus.INCOMPLETE,
            time_in=entry.clock_in,
        )

    decision = factory.decide(clock_in=entry.clock_in, clock_out=entry.clock_out, employee=employee)
    if decision.is_late and decision.is_early_leave:
        status = DayStatus.LATE_EARLY_LEAVE
    elif decision.is_late:
        status = DayStatus.LATE
    elif decision.is_early_leave:
        status = DayStatus.EARLY_LEAVE
    else:
        status = DayStatus.PRESENT

    total_hours = calculate_total_hours(entry.clock_in, entry.clock_out)
    return DailyLogEntry(
        work_date=work_date,
        day_name=label,
        status=status,
        time_in=entry.clock_in,
        time_out=entry.clock_out,
        total_hours=total_hours,
        overtime_hours=calculate_overtime_hours(total_hours, employee.standard_hours_per_day),
        is_late=decision.is_late,
        is_early_leave=decision.is_early_leave,
        late_by_minutes=decision.late_by_minutes,
    )
