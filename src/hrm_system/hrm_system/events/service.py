from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import next_anniversary
from ..core.constants import DEFAULT_UPCOMING_EVENT_DAYS
from ..core.enums import EmployeeEventType
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import EmployeeEvent, UpcomingEvents


def _event(
    employee: Employee,
    event_type: EmployeeEventType,
    event_date: date,
    today: date,
    years_completed: Optional[int] = None,
) -> EmployeeEvent:
    return EmployeeEvent(
        event_type=event_type,
        employee_id=employee.employee_id,
        employee_name=employee.full_name,
        department=employee.department,
        event_date=event_date,
        days_until=(event_date - today).days,
        years_completed=years_completed,
    )


def _by_date(events: list[EmployeeEvent]) -> list[EmployeeEvent]:
    return sorted(events, key=lambda e: (e.days_until, e.employee_name.lower()))


class EventService:
    """Birthdays and work anniversaries of active employees."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def upcoming(self, today: date, days_ahead: int = DEFAULT_UPCOMING_EVENT_DAYS) -> UpcomingEvents:
        """Events whose next occurrence is within ``[today, today + days_ahead]``.

        Anniversaries count only completed years, so an employee who joined
        this year (or joins later) has none yet.
        """
        if days_ahead < 0:
            raise ValidationError("days_ahead cannot be negative", errors={"days": "negative"})

        birthdays: list[EmployeeEvent] = []
        anniversaries: list[EmployeeEvent] = []
        for employee in self._employees.list_active():
            if employee.date_of_birth is not None:
                birthday = next_anniversary(employee.date_of_birth, today)
                if (birthday - today).days <= days_ahead:
                    birthdays.append(_event(employee, EmployeeEventType.BIRTHDAY, birthday, today))

            anniversary = next_anniversary(employee.join_date, today)
            years = anniversary.year - employee.join_date.year
            if years > 0 and (anniversary - today).days <= days_ahead:
                anniversaries.append(
                    _event(employee, EmployeeEventType.WORK_ANNIVERSARY, anniversary, today, years_completed=years)
                )

        return UpcomingEvents(birthdays=_by_date(birthdays), anniversaries=_by_date(anniversaries))

    def on_day(self, today: date) -> UpcomingEvents:
        return self.upcoming(today, days_ahead=0)
