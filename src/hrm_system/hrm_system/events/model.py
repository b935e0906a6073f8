from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeEventType


@dataclass(frozen=True)
class EmployeeEvent:
    """A birthday or work anniversary falling on ``event_date``."""

    event_type: EmployeeEventType
    employee_id: int
    employee_name: str
    department: Optional[str]
    event_date: date
    days_until: int
    years_completed: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "event_type": self.event_type.value,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "department": self.department,
            "event_date": self.event_date.isoformat(),
            "days_until": self.days_until,
            "years_completed": self.years_completed,
        }


@dataclass(frozen=True)
class UpcomingEvents:
    birthdays: list[EmployeeEvent]
    anniversaries: list[EmployeeEvent]

    def to_dict(self) -> dict:
        return {
            "birthdays": [e.to_dict() for e in self.birthdays],
            "anniversaries": [e.to_dict() for e in self.anniversaries],
        }
