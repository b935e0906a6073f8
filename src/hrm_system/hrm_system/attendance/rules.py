"""Hour and punctuality rules shared by punches, the classifier and payroll.

All time-of-day comparisons are at minute granularity; seconds are ignored.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import minutes_of_day


def _elapsed_minutes(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def calculate_total_hours(clock_in: Optional[datetime], clock_out: Optional[datetime]) -> float:
    if not clock_in or not clock_out:
        return 0.0
    return round(_elapsed_minutes(clock_in, clock_out) / 60, 2)


def calculate_overtime_hours(total_hours: float, standard_hours: float) -> float:
    return round(max(0.0, total_hours - standard_hours), 2)


def is_late(clock_in: datetime, shift_start: time) -> bool:
    # Arriving exactly at shift start is on time.
    return minutes_of_day(clock_in) > minutes_of_day(shift_start)


def late_by_minutes(clock_in: datetime, shift_start: time) -> int:
    return max(0, minutes_of_day(clock_in) - minutes_of_day(shift_start))


def is_early_leave(clock_out: datetime, shift_end: time) -> bool:
    # Leaving exactly at shift end is not early.
    return minutes_of_day(clock_out) < minutes_of_day(shift_end)


def calculate_elapsed_hours(clock_in: Optional[datetime], now: datetime) -> Optional[float]:
    """Live duration of an open punch, for display only."""
    if not clock_in:
        return None
    minutes = _elapsed_minutes(clock_in, now)
    if minutes <= 0:
        return None
    return round(minutes / 60, 2)
