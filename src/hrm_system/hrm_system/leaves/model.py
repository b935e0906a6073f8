from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date, coerce_datetime
from ..common.validators import parse_field, parse_optional, to_bool, to_float
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..employees.model import Employee


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: float
    status: LeaveStatus
    is_half_day: bool = False
    reason: Optional[str] = None
    approver_id: Optional[int] = None
    approver_comment: Optional[str] = None
    decided_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LeaveRequest":
        start_date = parse_field(row, "start_date", coerce_date)
        end_date = parse_field(row, "end_date", coerce_date)
        if end_date < start_date:
            raise ValidationError("end_date is before start_date", errors={"end_date": "before start_date"})

        total_days = parse_field(row, "total_days", to_float)
        if total_days < 0:
            raise ValidationError("total_days cannot be negative", errors={"total_days": "negative"})

        return cls(
            request_id=parse_field(row, "request_id", int),
            employee_id=parse_field(row, "employee_id", int),
            leave_type=parse_field(row, "leave_type", LeaveType),
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            status=parse_field(row, "status", LeaveStatus, default=LeaveStatus.PENDING),
            is_half_day=parse_field(row, "is_half_day", to_bool, default=False),
            reason=row.get("reason") or None,
            approver_id=parse_optional(row, "approver_id", int),
            approver_comment=row.get("approver_comment") or None,
            decided_at=parse_optional(row, "decided_at", coerce_datetime),
            created_at=parse_optional(row, "created_at", coerce_datetime),
        )

    def overlaps(self, start: date, end: date) -> bool:
        """Closed-interval intersection with [start, end]."""
        return self.start_date <= end and start <= self.end_date

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "is_half_day": self.is_half_day,
            "total_days": self.total_days,
            "status": self.status.value,
            "reason": self.reason,
            "approver_id": self.approver_id,
            "approver_comment": self.approver_comment,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class LeaveBalance:
    """Per (employee, leave type, year) allowance. Maintained outside this service."""

    employee_id: int
    leave_type: LeaveType
    year: int
    total_days: float
    used_days: float
    remaining_days: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LeaveBalance":
        return cls(
            employee_id=parse_field(row, "employee_id", int),
            leave_type=parse_field(row, "leave_type", LeaveType),
            year=parse_field(row, "year", int),
            total_days=parse_field(row, "total_days", to_float, default=0.0),
            used_days=parse_field(row, "used_days", to_float, default=0.0),
            remaining_days=parse_field(row, "remaining_days", to_float, default=0.0),
        )

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "year": self.year,
            "total_days": self.total_days,
            "used_days": self.used_days,
            "remaining_days": self.remaining_days,
        }


@dataclass(frozen=True)
class LeaveRequestView:
    """A request joined with the requesting employee, for the admin queue."""

    request: LeaveRequest
    employee: Employee

    def to_dict(self) -> dict:
        return {
            **self.request.to_dict(),
            "employee": {
                "employee_id": self.employee.employee_id,
                "employee_code": self.employee.employee_code,
                "first_name": self.employee.first_name,
                "last_name": self.employee.last_name,
                "email": self.employee.email,
                "department": self.employee.department,
            },
        }
