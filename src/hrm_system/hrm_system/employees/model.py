from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, coerce_time
from ..common.validators import parse_field, parse_optional, require_field, to_bool, to_float
from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START, DEFAULT_STANDARD_HOURS_PER_DAY
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee with the schedule used for attendance rules.

    Note: Plain data object, no database access here.
    """

    employee_id: int
    first_name: str
    last_name: str
    email: str
    join_date: date
    department: Optional[str] = None
    designation: Optional[str] = None
    standard_shift_start: time = DEFAULT_SHIFT_START
    standard_shift_end: time = DEFAULT_SHIFT_END
    standard_hours_per_day: float = DEFAULT_STANDARD_HOURS_PER_DAY
    is_admin: bool = False
    is_active: bool = True
    employee_code: Optional[str] = None
    date_of_birth: Optional[date] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Employee":
        hours = parse_field(row, "standard_hours_per_day", to_float, default=DEFAULT_STANDARD_HOURS_PER_DAY)
        if hours <= 0:
            raise ValidationError(
                "standard_hours_per_day must be greater than 0",
                errors={"standard_hours_per_day": "must be greater than 0"},
            )

        return cls(
            employee_id=parse_field(row, "employee_id", int),
            first_name=str(require_field(row, "first_name")).strip(),
            last_name=str(row.get("last_name") or "").strip(),
            email=str(require_field(row, "email")).strip(),
            join_date=parse_field(row, "join_date", coerce_date),
            department=row.get("department") or None,
            designation=row.get("designation") or None,
            standard_shift_start=parse_field(row, "standard_shift_start", coerce_time, default=DEFAULT_SHIFT_START),
            standard_shift_end=parse_field(row, "standard_shift_end", coerce_time, default=DEFAULT_SHIFT_END),
            standard_hours_per_day=hours,
            is_admin=parse_field(row, "is_admin", to_bool, default=False),
            is_active=parse_field(row, "is_active", to_bool, default=True),
            employee_code=parse_optional(row, "employee_code", str),
            date_of_birth=parse_optional(row, "date_of_birth", coerce_date),
        )

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_code": self.employee_code,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "email": self.email,
            "department": self.department,
            "designation": self.designation,
            "join_date": self.join_date.isoformat(),
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "standard_shift_start": self.standard_shift_start.strftime("%H:%M"),
            "standard_shift_end": self.standard_shift_end.strftime("%H:%M"),
            "standard_hours_per_day": self.standard_hours_per_day,
            "is_admin": self.is_admin,
            "is_active": self.is_active,
        }
