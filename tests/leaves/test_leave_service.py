from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from hrm_system.core.enums import LeaveStatus, LeaveType
from hrm_system.core.exceptions import NotFoundError, OverlappingLeaveError, ValidationError
from hrm_system.employees.model import Employee
from hrm_system.leaves.model import LeaveBalance, LeaveRequest
from hrm_system.leaves.service import LeaveService


class FakeEmployeesRepo:
    def __init__(self, employees):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))


class FakeLeavesRepo:
    def __init__(self, balances=()):
        self._next_id = 1
        self._rows: dict[int, LeaveRequest] = {}
        self._balances = list(balances)

    def get(self, request_id):
        return self._rows.get(int(request_id))

    def list_for_employee(self, employee_id):
        return [r for r in self._rows.values() if r.employee_id == employee_id]

    def list_by_status(self, status):
        return [r for r in self._rows.values() if r.status == status]

    def list_requests(self, *, leave_type=None, status=None):
        rows = [
            r
            for r in self._rows.values()
            if (leave_type is None or r.leave_type == leave_type) and (status is None or r.status == status)
        ]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    def create(self, *, employee_id, leave_type, start_date, end_date, is_half_day, total_days, reason):
        rid = self._next_id
        self._next_id += 1
        self._rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            status=LeaveStatus.PENDING,
            is_half_day=is_half_day,
            reason=reason,
            created_at=datetime(2025, 6, 1, 10, 0) + timedelta(minutes=rid),
        )
        return rid

    def set_status(self, *, request_id, status, approver_id, approver_comment, decided_at):
        req = self._rows.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self._rows[int(request_id)] = replace(
            req,
            status=status,
            approver_id=approver_id,
            approver_comment=approver_comment,
            decided_at=decided_at,
        )
        return True

    def list_balances(self, employee_id, year):
        return [b for b in self._balances if b.employee_id == employee_id and b.year == year]


def _employees():
    return FakeEmployeesRepo(
        [
            Employee(
                employee_id=1,
                first_name="John",
                last_name="Doe",
                email="j@test.com",
                join_date=date(2024, 1, 1),
                employee_code="EMP-0001",
            ),
            Employee(
                employee_id=2,
                first_name="Jane",
                last_name="Roe",
                email="r@test.com",
                join_date=date(2024, 1, 1),
                employee_code="EMP-0002",
            ),
        ]
    )


def _service(balances=(), *, now=datetime(2025, 6, 1, 10, 0)):
    leaves = FakeLeavesRepo(balances)
    svc = LeaveService(leaves, _employees(), clock=lambda: now)
    return svc, leaves


def _submit(svc, start, end, *, employee_id=1, leave_type=LeaveType.PAID, is_half_day=False):
    return svc.submit_request(
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        is_half_day=is_half_day,
        reason="family",
    )


def test_submit_stores_pending_request_with_days():
    svc, _ = _service()

    req = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))

    assert req.status == LeaveStatus.PENDING
    assert req.total_days == 3.0
    assert req.reason == "family"


def test_half_day_must_be_single_date():
    svc, _ = _service()

    req = _submit(svc, date(2025, 6, 10), date(2025, 6, 10), is_half_day=True)
    assert req.total_days == 0.5

    with pytest.raises(ValidationError):
        _submit(svc, date(2025, 6, 20), date(2025, 6, 21), is_half_day=True)


def test_end_before_start_is_rejected():
    svc, _ = _service()

    with pytest.raises(ValidationError) as exc:
        _submit(svc, date(2025, 6, 12), date(2025, 6, 10))
    assert "end_date" in exc.value.errors


def test_overlapping_request_is_rejected_until_cancelled():
    svc, _ = _service()
    first = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))
    svc.approve(first.request_id, approver_id=2)

    with pytest.raises(OverlappingLeaveError):
        _submit(svc, date(2025, 6, 11), date(2025, 6, 11))
    assert _submit(svc, date(2025, 6, 13), date(2025, 6, 14)).status == LeaveStatus.PENDING


def test_overlap_is_per_employee():
    svc, _ = _service()
    _submit(svc, date(2025, 6, 10), date(2025, 6, 12))

    assert _submit(svc, date(2025, 6, 10), date(2025, 6, 12), employee_id=2).employee_id == 2


def test_rejected_request_frees_the_dates():
    svc, _ = _service()
    first = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))
    rejected = svc.reject(first.request_id, approver_id=2, comment="busy week")

    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.approver_comment == "busy week"
    assert rejected.decided_at == datetime(2025, 6, 1, 10, 0)
    assert _submit(svc, date(2025, 6, 11), date(2025, 6, 11)).total_days == 1.0


def test_only_pending_requests_can_be_decided():
    svc, _ = _service()
    req = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))
    svc.approve(req.request_id, approver_id=2)

    with pytest.raises(ValidationError):
        svc.reject(req.request_id, approver_id=2)
    with pytest.raises(NotFoundError):
        svc.approve(999, approver_id=2)


def test_cancel_only_by_owner():
    svc, _ = _service()
    req = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))

    with pytest.raises(ValidationError):
        svc.cancel(req.request_id, employee_id=2)

    cancelled = svc.cancel(req.request_id, employee_id=1)
    assert cancelled.status == LeaveStatus.CANCELLED
    assert svc.list_pending() == []


def test_balance_limits_paid_leave_but_not_unpaid():
    balances = [
        LeaveBalance(employee_id=1, leave_type=LeaveType.PAID, year=2025, total_days=20, used_days=18, remaining_days=2),
    ]
    svc, _ = _service(balances)

    with pytest.raises(ValidationError):
        _submit(svc, date(2025, 6, 10), date(2025, 6, 12))

    assert _submit(svc, date(2025, 6, 10), date(2025, 6, 11)).total_days == 2.0
    assert _submit(svc, date(2025, 7, 1), date(2025, 7, 10), leave_type=LeaveType.UNPAID).total_days == 10.0
    # no balance row for sick leave: not limited
    assert _submit(svc, date(2025, 8, 1), date(2025, 8, 5), leave_type=LeaveType.SICK).total_days == 5.0


def test_unknown_employee_is_not_found():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        _submit(svc, date(2025, 6, 10), date(2025, 6, 12), employee_id=42)


def test_start_date_in_the_past_is_rejected():
    svc, _ = _service()

    with pytest.raises(ValidationError) as exc:
        _submit(svc, date(2025, 5, 30), date(2025, 6, 2))
    assert exc.value.errors == {"start_date": "in the past"}

    assert _submit(svc, date(2025, 6, 1), date(2025, 6, 1)).status == LeaveStatus.PENDING


def test_started_leave_cannot_be_cancelled():
    svc, leaves = _service()
    req = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))

    later = LeaveService(leaves, _employees(), clock=lambda: datetime(2025, 6, 11, 8, 0))
    with pytest.raises(ValidationError):
        later.cancel(req.request_id, employee_id=1)
    assert leaves.get(req.request_id).status == LeaveStatus.PENDING

    first_day = LeaveService(leaves, _employees(), clock=lambda: datetime(2025, 6, 10, 8, 0))
    assert first_day.cancel(req.request_id, employee_id=1).status == LeaveStatus.CANCELLED


def test_list_requests_filters_and_searches_newest_first():
    svc, _ = _service()
    john_paid = _submit(svc, date(2025, 6, 10), date(2025, 6, 12))
    jane_sick = _submit(svc, date(2025, 6, 10), date(2025, 6, 10), employee_id=2, leave_type=LeaveType.SICK)
    john_unpaid = _submit(svc, date(2025, 7, 1), date(2025, 7, 2), leave_type=LeaveType.UNPAID)
    svc.approve(john_paid.request_id, approver_id=2)

    everything = svc.list_requests()
    assert [v.request.request_id for v in everything] == [
        john_unpaid.request_id,
        jane_sick.request_id,
        john_paid.request_id,
    ]
    assert everything[1].employee.full_name == "Jane Roe"
    assert everything[1].to_dict()["employee"]["employee_code"] == "EMP-0002"

    pending = svc.list_requests(status=LeaveStatus.PENDING)
    assert [v.request.request_id for v in pending] == [john_unpaid.request_id, jane_sick.request_id]

    assert [v.request.request_id for v in svc.list_requests(leave_type=LeaveType.SICK)] == [jane_sick.request_id]
    assert [v.employee.employee_id for v in svc.list_requests(search="  doe ")] == [1, 1]
    assert [v.request.request_id for v in svc.list_requests(search="emp-0002")] == [jane_sick.request_id]
    assert svc.list_requests(search="nobody") == []
