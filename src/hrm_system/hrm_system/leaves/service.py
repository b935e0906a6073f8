from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, OverlappingLeaveError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import LeaveBalance, LeaveRequest, LeaveRequestView
from .repository import LeaveRepository
from .rules import calculate_leave_days, has_overlapping_leave

logger = logging.getLogger(__name__)

# Leave types drawn from a yearly allowance; unpaid leave is deducted from pay instead.
_BALANCED_TYPES = frozenset({LeaveType.PAID, LeaveType.SICK})


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._employees = employees
        self._clock = clock

    def submit_request(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        is_half_day: bool = False,
        reason: str = "",
    ) -> LeaveRequest:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        if end_date < start_date:
            raise ValidationError("End date must be on or after start date", errors={"end_date": "before start_date"})
        if start_date < self._clock().date():
            raise ValidationError("Start date cannot be in the past", errors={"start_date": "in the past"})
        if is_half_day and start_date != end_date:
            raise ValidationError(
                "A half-day leave must start and end on the same date",
                errors={"is_half_day": "start_date and end_date differ"},
            )

        existing = self._leaves.list_for_employee(employee.employee_id)
        if has_overlapping_leave(existing, start_date, end_date):
            raise OverlappingLeaveError(
                "You already have a leave request overlapping these dates",
                errors={"start_date": "overlaps an existing request"},
            )

        total_days = calculate_leave_days(start_date, end_date, is_half_day)
        if leave_type in _BALANCED_TYPES:
            self._check_balance(employee.employee_id, leave_type, start_date.year, total_days)

        request_id = self._leaves.create(
            employee_id=employee.employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            is_half_day=is_half_day,
            total_days=total_days,
            reason=(reason or "").strip() or None,
        )
        logger.info(
            "leave_request_submitted",
            extra={
                "request_id": request_id,
                "employee_id": employee.employee_id,
                "leave_type": leave_type.value,
                "total_days": total_days,
            },
        )
        return self._require(request_id)

    def _check_balance(self, employee_id: int, leave_type: LeaveType, year: int, total_days: float) -> None:
        balance = next(
            (b for b in self._leaves.list_balances(employee_id, year) if b.leave_type == leave_type),
            None,
        )
        if balance is not None and total_days > balance.remaining_days:
            raise ValidationError(
                f"Insufficient {leave_type.value} leave balance: {balance.remaining_days:g} day(s) remaining",
                errors={"leave_type": "insufficient balance"},
            )

    def _require(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get(int(request_id))
        if not req:
            raise NotFoundError(f"Leave request {request_id} not found")
        return req

    def _decide(
        self,
        request_id: int,
        *,
        status: LeaveStatus,
        approver_id: Optional[int],
        comment: str,
    ) -> LeaveRequest:
        req = self._require(request_id)
        if req.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request is already {req.status.value}")

        ok = self._leaves.set_status(
            request_id=req.request_id,
            status=status,
            approver_id=approver_id,
            approver_comment=(comment or "").strip() or None,
            decided_at=self._clock(),
        )
        if not ok:
            raise ValidationError("Leave request is no longer pending")

        logger.info(
            "leave_request_decided",
            extra={
                "request_id": req.request_id,
                "employee_id": req.employee_id,
                "status": status.value,
                "approver_id": approver_id,
            },
        )
        return self._require(req.request_id)

    def approve(self, request_id: int, *, approver_id: int, comment: str = "") -> LeaveRequest:
        return self._decide(request_id, status=LeaveStatus.APPROVED, approver_id=int(approver_id), comment=comment)

    def reject(self, request_id: int, *, approver_id: int, comment: str = "") -> LeaveRequest:
        return self._decide(request_id, status=LeaveStatus.REJECTED, approver_id=int(approver_id), comment=comment)

    def cancel(self, request_id: int, *, employee_id: int) -> LeaveRequest:
        req = self._require(request_id)
        if req.employee_id != int(employee_id):
            raise ValidationError("Only the requesting employee can cancel this leave")
        if req.start_date < self._clock().date():
            raise ValidationError(
                "A leave that has already started cannot be cancelled",
                errors={"start_date": "already started"},
            )
        return self._decide(req.request_id, status=LeaveStatus.CANCELLED, approver_id=None, comment="")

    def list_for_employee(self, employee_id: int) -> list[LeaveRequest]:
        return list(self._leaves.list_for_employee(int(employee_id)))

    def list_pending(self) -> list[LeaveRequest]:
        return list(self._leaves.list_by_status(LeaveStatus.PENDING))

    def list_requests(
        self,
        *,
        leave_type: Optional[LeaveType] = None,
        status: Optional[LeaveStatus] = None,
        search: Optional[str] = None,
    ) -> list[LeaveRequestView]:
        """Admin queue: filtered requests, newest first, each with its employee.

        ``search`` matches the employee's full name or employee code, case-insensitively.
        """

        needle = (search or "").strip().lower()
        employees: dict[int, Optional[Employee]] = {}
        views: list[LeaveRequestView] = []
        for req in self._leaves.list_requests(leave_type=leave_type, status=status):
            if req.employee_id not in employees:
                employees[req.employee_id] = self._employees.get_by_id(req.employee_id)
            employee = employees[req.employee_id]
            if employee is None:
                raise NotFoundError(f"Employee {req.employee_id} of leave request {req.request_id} not found")
            if needle and not (
                needle in employee.full_name.lower() or needle in (employee.employee_code or "").lower()
            ):
                continue
            views.append(LeaveRequestView(request=req, employee=employee))
        return views

    def get_balances(self, employee_id: int, year: int) -> list[LeaveBalance]:
        return list(self._leaves.list_balances(int(employee_id), int(year)))
