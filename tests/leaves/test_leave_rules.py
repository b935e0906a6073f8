from datetime import date

import pytest

from hrm_system.core.enums import LeaveStatus, LeaveType
from hrm_system.core.exceptions import ValidationError
from hrm_system.leaves.model import LeaveRequest
from hrm_system.leaves.rules import calculate_leave_days, has_overlapping_leave


def _request(start, end, status=LeaveStatus.APPROVED, request_id=1):
    return LeaveRequest(
        request_id=request_id,
        employee_id=1,
        leave_type=LeaveType.PAID,
        start_date=start,
        end_date=end,
        total_days=calculate_leave_days(start, end, False),
        status=status,
    )


def test_leave_days_inclusive_and_half_day():
    assert calculate_leave_days(date(2025, 6, 10), date(2025, 6, 12), False) == 3.0
    assert calculate_leave_days(date(2025, 6, 10), date(2025, 6, 10), False) == 1.0
    assert calculate_leave_days(date(2025, 6, 10), date(2025, 6, 10), True) == 0.5
    assert calculate_leave_days(date(2024, 2, 28), date(2024, 3, 1), False) == 3.0


def test_overlap_example():
    existing = [_request(date(2025, 6, 10), date(2025, 6, 12))]

    assert has_overlapping_leave(existing, date(2025, 6, 11), date(2025, 6, 11)) is True
    assert has_overlapping_leave(existing, date(2025, 6, 13), date(2025, 6, 14)) is False


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2025, 6, 8), date(2025, 6, 10)),
        (date(2025, 6, 12), date(2025, 6, 15)),
        (date(2025, 6, 1), date(2025, 6, 30)),
    ],
)
def test_overlap_is_closed_interval_in_both_directions(start, end):
    existing = [_request(date(2025, 6, 10), date(2025, 6, 12))]

    assert has_overlapping_leave(existing, start, end) is True


@pytest.mark.parametrize("status", [LeaveStatus.REJECTED, LeaveStatus.CANCELLED])
def test_inactive_requests_never_block(status):
    existing = [_request(date(2025, 6, 10), date(2025, 6, 12), status=status)]

    assert has_overlapping_leave(existing, date(2025, 6, 11), date(2025, 6, 11)) is False


def test_pending_requests_block():
    existing = [_request(date(2025, 6, 10), date(2025, 6, 12), status=LeaveStatus.PENDING)]

    assert has_overlapping_leave(existing, date(2025, 6, 12), date(2025, 6, 20)) is True


def test_from_row_validates_dates_and_enums():
    row = {
        "request_id": "7",
        "employee_id": 1,
        "leave_type": "unpaid",
        "start_date": "2025-06-10",
        "end_date": "2025-06-12",
        "total_days": "3.0",
        "status": "approved",
        "is_half_day": 0,
    }
    req = LeaveRequest.from_row(row)
    assert req.request_id == 7
    assert req.leave_type == LeaveType.UNPAID
    assert req.total_days == 3.0

    with pytest.raises(ValidationError):
        LeaveRequest.from_row({**row, "end_date": "2025-06-09"})
    with pytest.raises(ValidationError) as exc:
        LeaveRequest.from_row({**row, "leave_type": "vacation"})
    assert exc.value.errors == {"leave_type": "invalid"}
