from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, next_anniversary
from ..common.validators import parse_field, require_field, to_bool


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    name: str
    holiday_date: date
    is_recurring: bool = False
    description: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Holiday":
        return cls(
            holiday_id=parse_field(row, "holiday_id", int),
            name=str(require_field(row, "name")).strip(),
            holiday_date=parse_field(row, "holiday_date", coerce_date),
            is_recurring=parse_field(row, "is_recurring", to_bool, default=False),
            description=row.get("description") or None,
        )

    def next_occurrence(self, today: date) -> date:
        """The date this holiday next falls on, on or after ``today``.

        One-off holidays keep their stored date. Recurring ones roll forward to
        the next anniversary; 29 February lands on 28 February in common years.
        """
        if not self.is_recurring:
            return self.holiday_date
        return next_anniversary(self.holiday_date, today)

    def to_dict(self, *, occurs_on: Optional[date] = None) -> dict:
        return {
            "holiday_id": self.holiday_id,
            "name": self.name,
            "holiday_date": self.holiday_date.isoformat(),
            "occurs_on": (occurs_on or self.holiday_date).isoformat(),
            "is_recurring": self.is_recurring,
            "description": self.description,
        }
