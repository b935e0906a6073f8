from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimeEntry]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_for_period(self, *, start_date: date, end_date: date) -> Sequence[TimeEntry]:
        """All employees' entries in an inclusive date window (payroll runs)."""

        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        is_late: bool,
        late_by_minutes: int,
    ) -> int:
        """Insert the open entry; raises DuplicateRecordError when one already exists for the date."""

        raise NotImplementedError

    def update_clock_out(
        self,
        *,
        entry_id: int,
        clock_out: datetime,
        total_hours: float,
        overtime_hours: float,
        is_early_leave: bool,
    ) -> bool:
        raise NotImplementedError
