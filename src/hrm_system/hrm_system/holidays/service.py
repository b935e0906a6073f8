from __future__ import annotations

from datetime import date, timedelta

from ..core.constants import DEFAULT_UPCOMING_HOLIDAY_DAYS
from ..core.exceptions import ValidationError
from .model import Holiday
from .repository import HolidayRepository


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def upcoming(self, today: date, days_ahead: int = DEFAULT_UPCOMING_HOLIDAY_DAYS) -> list[tuple[date, Holiday]]:
        """Holidays falling within ``[today, today + days_ahead]`` as (occurs_on, holiday), by date."""
        if days_ahead < 0:
            raise ValidationError("days_ahead cannot be negative", errors={"days": "negative"})

        horizon = today + timedelta(days=days_ahead)
        found = []
        for holiday in self._holidays.list_all():
            occurs_on = holiday.next_occurrence(today)
            if today <= occurs_on <= horizon:
                found.append((occurs_on, holiday))
        found.sort(key=lambda pair: (pair[0], pair[1].name))
        return found
