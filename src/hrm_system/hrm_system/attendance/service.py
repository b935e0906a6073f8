from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_period
from ..core.constants import DEFAULT_RECENT_DAYS
from ..core.enums import DayStatus, PunchState
from ..core.exceptions import DuplicateRecordError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .analytics import (
    TodayOverview,
    available_months,
    build_monthly_attendance,
    build_today_overview,
    recent_attendance,
)
from .factory import AttendanceStrategyFactory
from .model import AttendanceAnalytics, TimeEntry, TodayStatus
from .repository import TimeEntryRepository
from .rules import calculate_overtime_hours, calculate_total_hours

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        time_entries: TimeEntryRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._entries = time_entries
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def _get_active_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        if not employee.is_active:
            raise ValidationError("Employee is inactive")
        return employee

    def clock_in(self, employee_id: int, *, now: datetime | None = None) -> TimeEntry:
        now = now or self._clock()
        today = now.date()
        employee = self._get_active_employee(employee_id)

        existing = self._entries.get_for_employee_and_date(employee.employee_id, today)
        if existing and existing.clock_out is None:
            return existing
        if existing:
            raise ValidationError("You have already completed your shift today")

        strategy = self._factory.for_clock_in(clock_in=now, employee=employee)
        decision = strategy.decide_clock_in(clock_in=now, employee=employee)

        try:
            self._entries.create_clock_in(
                employee_id=employee.employee_id,
                work_date=today,
                clock_in=now,
                is_late=decision.is_late,
                late_by_minutes=decision.late_by_minutes,
            )
        except DuplicateRecordError:
            # a concurrent clock-in for the same date won the insert
            logger.info(
                "clock_in_already_recorded",
                extra={"employee_id": employee.employee_id, "work_date": today.isoformat()},
            )
            return self._require_entry(employee.employee_id, today)

        logger.info(
            "clock_in_recorded",
            extra={
                "employee_id": employee.employee_id,
                "work_date": today.isoformat(),
                "is_late": decision.is_late,
                "late_by_minutes": decision.late_by_minutes,
            },
        )
        return self._require_entry(employee.employee_id, today)

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> TimeEntry:
        now = now or self._clock()
        today = now.date()
        employee = self._get_active_employee(employee_id)

        entry = self._entries.get_for_employee_and_date(employee.employee_id, today)
        if not entry or entry.clock_in is None:
            raise ValidationError("You have not clocked in today")
        if entry.clock_out is not None:
            raise ValidationError("You have already clocked out today")
        if now < entry.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        decision = self._factory.decide(clock_in=entry.clock_in, clock_out=now, employee=employee)

        total_hours = calculate_total_hours(entry.clock_in, now)
        overtime_hours = calculate_overtime_hours(total_hours, employee.standard_hours_per_day)
        ok = self._entries.update_clock_out(
            entry_id=entry.entry_id,
            clock_out=now,
            total_hours=total_hours,
            overtime_hours=overtime_hours,
            is_early_leave=decision.is_early_leave,
        )
        if not ok:
            raise ValidationError("Recording clock-out failed")

        logger.info(
            "clock_out_recorded",
            extra={
                "employee_id": employee.employee_id,
                "work_date": today.isoformat(),
                "total_hours": total_hours,
                "overtime_hours": overtime_hours,
                "is_early_leave": decision.is_early_leave,
            },
        )
        return self._require_entry(employee.employee_id, today)

    def _require_entry(self, employee_id: int, work_date: date) -> TimeEntry:
        entry = self._entries.get_for_employee_and_date(employee_id, work_date)
        if not entry:
            raise NotFoundError(f"Time entry for employee {employee_id} on {work_date} not found")
        return entry

    def today_status(self, employee_id: int, *, today: date | None = None) -> TodayStatus:
        today = today or self._clock().date()
        entry = self._entries.get_for_employee_and_date(int(employee_id), today)
        if not entry or entry.clock_in is None:
            return TodayStatus(state=PunchState.NOT_CLOCKED_IN)
        if entry.clock_out is None:
            return TodayStatus(state=PunchState.CLOCKED_IN, entry=entry)
        return TodayStatus(state=PunchState.COMPLETED, entry=entry)

    def monthly_analytics(
        self,
        employee_id: int,
        *,
        year: int,
        month: int,
        today: date | None = None,
    ) -> AttendanceAnalytics:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        year, month = require_period(year, month)
        start, end = month_bounds(year, month)
        entries = self._entries.list_for_employee(employee.employee_id, start_date=start, end_date=end)
        return build_monthly_attendance(
            employee,
            entries,
            year=year,
            month=month,
            today=today or self._clock().date(),
            factory=self._factory,
        )

    def recent(self, employee_id: int, *, limit: int = DEFAULT_RECENT_DAYS) -> list[TimeEntry]:
        return recent_attendance(self._entries.list_for_employee(int(employee_id)), limit=limit)

    def months_with_data(self, employee_id: int, *, today: date | None = None) -> list[tuple[int, int]]:
        entries = self._entries.list_for_employee(int(employee_id))
        return available_months(entries, today=today or self._clock().date())

    def today_overview(
        self,
        *,
        department: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[DayStatus] = None,
        now: datetime | None = None,
    ) -> TodayOverview:
        now = now or self._clock()
        today = now.date()
        return build_today_overview(
            self._employees.list_active(include_admins=False),
            self._entries.list_for_date(today),
            today=today,
            now=now,
            department=department,
            search=search,
            status=status,
            factory=self._factory,
        )
