from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import LeaveStatus
from .model import LeaveRequest

# Requests in these states no longer reserve their dates.
INACTIVE_STATUSES = frozenset({LeaveStatus.REJECTED, LeaveStatus.CANCELLED})


def calculate_leave_days(start: date, end: date, is_half_day: bool) -> float:
    """0.5 for a half day (caller guarantees start == end), else inclusive day count."""
    if is_half_day:
        return 0.5
    return float((end - start).days + 1)


def has_overlapping_leave(existing: Iterable[LeaveRequest], new_start: date, new_end: date) -> bool:
    return any(
        req.status not in INACTIVE_STATUSES and req.overlaps(new_start, new_end)
        for req in existing
    )
