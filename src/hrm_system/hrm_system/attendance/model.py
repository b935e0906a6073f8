from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, coerce_datetime
from ..common.validators import parse_field, parse_optional, to_bool, to_float
from ..core.enums import DayStatus, PunchState
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one clock-in/clock-out row per employee per date."""

    entry_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime] = None
    total_hours: Optional[float] = None
    overtime_hours: float = 0.0
    is_late: bool = False
    is_early_leave: bool = False
    notes: Optional[str] = None
    late_by_minutes: int = 0

    @property
    def is_complete(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TimeEntry":
        clock_in = parse_optional(row, "clock_in", coerce_datetime)
        clock_out = parse_optional(row, "clock_out", coerce_datetime)
        if clock_out is not None and clock_in is None:
            raise ValidationError("clock_out without clock_in", errors={"clock_out": "requires clock_in"})
        if clock_in is not None and clock_out is not None and clock_out < clock_in:
            raise ValidationError("clock_out is before clock_in", errors={"clock_out": "before clock_in"})

        return cls(
            entry_id=parse_field(row, "entry_id", int),
            employee_id=parse_field(row, "employee_id", int),
            work_date=parse_field(row, "work_date", coerce_date),
            clock_in=clock_in,
            clock_out=clock_out,
            total_hours=parse_optional(row, "total_hours", to_float),
            overtime_hours=parse_field(row, "overtime_hours", to_float, default=0.0),
            is_late=parse_field(row, "is_late", to_bool, default=False),
            is_early_leave=parse_field(row, "is_early_leave", to_bool, default=False),
            notes=row.get("notes") or None,
            late_by_minutes=parse_field(row, "late_by_minutes", int, default=0),
        )

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "clock_in": self.clock_in.isoformat() if self.clock_in else None,
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "total_hours": self.total_hours,
            "overtime_hours": self.overtime_hours,
            "is_late": self.is_late,
            "late_by_minutes": self.late_by_minutes,
            "is_early_leave": self.is_early_leave,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class DailyLogEntry:
    """Read-model: derived status and hours of one calendar day."""

    work_date: date
    day_name: str
    status: DayStatus
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    total_hours: Optional[float] = None
    overtime_hours: float = 0.0
    is_late: bool = False
    is_early_leave: bool = False
    late_by_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "day_name": self.day_name,
            "status": self.status.value,
            "time_in": self.time_in.isoformat() if self.time_in else None,
            "time_out": self.time_out.isoformat() if self.time_out else None,
            "total_hours": self.total_hours,
            "overtime_hours": self.overtime_hours,
            "is_late": self.is_late,
            "is_early_leave": self.is_early_leave,
            "late_by_minutes": self.late_by_minutes,
        }


@dataclass(frozen=True)
class AttendanceAnalytics:
    """Per-employee monthly KPI payload plus the day-by-day feed."""

    employee_id: int
    year: int
    month: int
    present_days: int = 0
    absent_days: int = 0
    late_arrivals: int = 0
    early_leaves: int = 0
    incomplete_punches: int = 0
    not_applicable_days: int = 0
    total_hours_worked: float = 0.0
    total_overtime_hours: float = 0.0
    average_hours_per_day: float = 0.0
    daily: list[DailyLogEntry] = field(default_factory=list)

    @property
    def attendance_rate(self) -> float:
        total = self.present_days + self.absent_days
        return self.present_days / total * 100 if total > 0 else 0.0

    @property
    def punctuality_score(self) -> float:
        if self.present_days <= 0:
            return 0.0
        return (self.present_days - self.late_arrivals - self.early_leaves) / self.present_days * 100

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year": self.year,
            "month": self.month,
            "present_days": self.present_days,
            "absent_days": self.absent_days,
            "late_arrivals": self.late_arrivals,
            "early_leaves": self.early_leaves,
            "incomplete_punches": self.incomplete_punches,
            "not_applicable_days": self.not_applicable_days,
            "total_hours_worked": self.total_hours_worked,
            "total_overtime_hours": self.total_overtime_hours,
            "average_hours_per_day": self.average_hours_per_day,
            "attendance_rate": round(self.attendance_rate, 2),
            "punctuality_score": round(self.punctuality_score, 2),
            "daily": [d.to_dict() for d in self.daily],
        }


@dataclass(frozen=True)
class TodayStatus:
    state: PunchState
    entry: Optional[TimeEntry] = None

    def to_dict(self) -> dict:
        return {"state": self.state.value, "entry": self.entry.to_dict() if self.entry else None}


@dataclass(frozen=True)
class TodayAttendanceRecord:
    """Row of the admin 'today' board."""

    employee_id: int
    employee_name: str
    department: Optional[str]
    status: DayStatus
    is_late: bool
    is_early_leave: bool
    total_hours: Optional[float]
    entry: Optional[TimeEntry] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "department": self.department,
            "status": self.status.value,
            "is_late": self.is_late,
            "is_early_leave": self.is_early_leave,
            "total_hours": self.total_hours,
            "entry": self.entry.to_dict() if self.entry else None,
        }


@dataclass(frozen=True)
class AttendanceOverviewStats:
    total_employees: int = 0
    present_today: int = 0
    absent_today: int = 0
    late_arrivals: int = 0
    early_leaves: int = 0
    incomplete_punches: int = 0
