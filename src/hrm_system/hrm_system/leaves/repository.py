from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        leave_type: Optional[LeaveType] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        """All requests matching the optional filters, newest first."""

        raise NotImplementedError

    def list_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        is_half_day: bool,
        total_days: float,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def set_status(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approver_id: Optional[int],
        approver_comment: Optional[str],
        decided_at: datetime,
    ) -> bool:
        """Transition a pending request; returns False when it was no longer pending."""

        raise NotImplementedError

    def list_balances(self, employee_id: int, year: int) -> Sequence[LeaveBalance]:
        raise NotImplementedError
