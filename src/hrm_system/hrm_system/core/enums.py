from __future__ import annotations

from enum import Enum


class DayStatus(str, Enum):
    """Derived status of one calendar day in an employee's attendance log."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EARLY_LEAVE = "early_leave"
    LATE_EARLY_LEAVE = "late_early_leave"
    INCOMPLETE = "incomplete"
    NOT_APPLICABLE = "not_applicable"

    @property
    def counts_as_present(self) -> bool:
        return self in _PRESENT_STATUSES


_PRESENT_STATUSES = frozenset(
    {DayStatus.PRESENT, DayStatus.LATE, DayStatus.EARLY_LEAVE, DayStatus.LATE_EARLY_LEAVE}
)


class PunchState(str, Enum):
    """Today's clock state shown on the employee dashboard."""

    NOT_CLOCKED_IN = "not_clocked_in"
    CLOCKED_IN = "clocked_in"
    COMPLETED = "completed"


class LeaveType(str, Enum):
    PAID = "paid"
    SICK = "sick"
    UNPAID = "unpaid"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class DeductionType(str, Enum):
    """How approved unpaid leave is deducted from gross pay."""

    HOURLY = "hourly"
    DAILY = "daily"


class EmployeeEventType(str, Enum):
    BIRTHDAY = "birthday"
    WORK_ANNIVERSARY = "work_anniversary"
