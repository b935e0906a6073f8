from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from hrm_system.attendance.model import TimeEntry
from hrm_system.container import wire_container
from hrm_system.core.enums import LeaveStatus
from hrm_system.employees.model import Employee
from hrm_system.holidays.model import Holiday
from hrm_system.leaves.model import LeaveRequest
from hrm_system.main import create_app
from hrm_system.payroll.model import PayrollSettings


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class FakeEmployeesRepo:
    def __init__(self):
        self._rows: dict[int, Employee] = {}

    def get_by_id(self, employee_id):
        return self._rows.get(int(employee_id))

    def list_active(self, *, include_admins=True):
        return [e for e in self._rows.values() if e.is_active and (include_admins or not e.is_admin)]

    def create(self, fields):
        eid = len(self._rows) + 1
        self._rows[eid] = Employee.from_row({**fields, "employee_id": eid})
        return eid

    def update(self, employee_id, fields):
        current = self._rows[int(employee_id)]
        self._rows[int(employee_id)] = Employee.from_row({**current.to_dict(), **fields, "employee_id": employee_id})
        return True

    def set_active(self, employee_id, *, is_active):
        self._rows[int(employee_id)] = replace(self._rows[int(employee_id)], is_active=is_active)
        return True

    def list_departments(self):
        return sorted({e.department for e in self._rows.values() if e.department})


class FakeTimeEntriesRepo:
    def __init__(self):
        self._rows: dict[int, TimeEntry] = {}

    def get_for_employee_and_date(self, employee_id, work_date):
        return next((e for e in self._rows.values() if (e.employee_id, e.work_date) == (employee_id, work_date)), None)

    def list_for_employee(self, employee_id, *, start_date=None, end_date=None):
        return [
            e
            for e in self._rows.values()
            if e.employee_id == employee_id
            and (start_date is None or e.work_date >= start_date)
            and (end_date is None or e.work_date <= end_date)
        ]

    def list_for_date(self, work_date):
        return [e for e in self._rows.values() if e.work_date == work_date]

    def list_for_period(self, *, start_date, end_date):
        return [e for e in self._rows.values() if start_date <= e.work_date <= end_date]

    def create_clock_in(self, *, employee_id, work_date, clock_in, is_late, late_by_minutes):
        eid = len(self._rows) + 1
        self._rows[eid] = TimeEntry(
            entry_id=eid,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            is_late=is_late,
            late_by_minutes=late_by_minutes,
        )
        return eid

    def update_clock_out(self, *, entry_id, clock_out, total_hours, overtime_hours, is_early_leave):
        self._rows[entry_id] = replace(
            self._rows[entry_id],
            clock_out=clock_out,
            total_hours=total_hours,
            overtime_hours=overtime_hours,
            is_early_leave=is_early_leave,
        )
        return True


class FakeLeavesRepo:
    def __init__(self):
        self._rows: dict[int, LeaveRequest] = {}

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
        return sorted(rows, key=lambda r: r.request_id, reverse=True)

    def list_overlapping(self, *, start_date, end_date, employee_id=None, status=None):
        return [
            r
            for r in self._rows.values()
            if r.overlaps(start_date, end_date)
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]

    def create(self, *, employee_id, leave_type, start_date, end_date, is_half_day, total_days, reason):
        rid = len(self._rows) + 1
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
        )
        return rid

    def set_status(self, *, request_id, status, approver_id, approver_comment, decided_at):
        req = self._rows[int(request_id)]
        if req.status != LeaveStatus.PENDING:
            return False
        self._rows[int(request_id)] = replace(
            req, status=status, approver_id=approver_id, approver_comment=approver_comment, decided_at=decided_at
        )
        return True

    def list_balances(self, employee_id, year):
        return []


class FakeHolidaysRepo:
    def list_all(self):
        return [Holiday(holiday_id=1, name="Christmas Day", holiday_date=date(2020, 12, 25), is_recurring=True)]


class FakeSettingsRepo:
    def __init__(self):
        self.current = PayrollSettings(settings_id=1, hourly_rate=10.0)

    def get_active(self):
        return self.current

    def save(self, settings):
        self.current = settings
        return settings.settings_id


class FakeSalaryRecordsRepo:
    def __init__(self):
        self.rows = []

    def get_for_period(self, employee_id, year, month):
        return next(
            (r for r in self.rows if (r.employee_id, r.period_year, r.period_month) == (employee_id, year, month)),
            None,
        )

    def list_for_employee(self, employee_id):
        return [r for r in self.rows if r.employee_id == employee_id]

    def insert(self, record):
        self.rows.append(replace(record, record_id=len(self.rows) + 1))
        return len(self.rows)


@pytest.fixture()
def clock():
    return FakeClock(datetime(2025, 12, 10, 9, 5))


@pytest.fixture()
def client(monkeypatch, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_container(
        employees_repo=FakeEmployeesRepo(),
        time_entries_repo=FakeTimeEntriesRepo(),
        leaves_repo=FakeLeavesRepo(),
        holidays_repo=FakeHolidaysRepo(),
        payroll_settings_repo=FakeSettingsRepo(),
        salary_records_repo=FakeSalaryRecordsRepo(),
        clock=clock,
    )
    app = create_app(container)
    return app.test_client()


def _onboard(client, **overrides):
    body = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@test.com",
        "join_date": "2025-01-01",
        "department": "Engineering",
    }
    body.update(overrides)
    return client.post("/api/employees", json=body)


def test_employee_crud(client):
    resp = _onboard(client)
    assert resp.status_code == 201
    assert resp.get_json()["data"]["standard_shift_start"] == "09:00"

    resp = client.patch("/api/employees/1", json={"department": "Sales"})
    assert resp.get_json()["data"]["department"] == "Sales"

    assert client.post("/api/employees/1/deactivate").status_code == 200
    assert client.get("/api/employees").get_json()["data"] == []


def test_errors_map_to_json(client):
    resp = client.get("/api/employees/9")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False

    resp = _onboard(client, standard_hours_per_day=0)
    assert resp.status_code == 400
    assert "standard_hours_per_day" in resp.get_json()["errors"]


def test_punch_flow_and_analytics(client, clock):
    _onboard(client)

    resp = client.post("/api/employees/1/clock-in")
    assert resp.status_code == 201
    assert resp.get_json()["data"]["is_late"] is True
    assert resp.get_json()["data"]["late_by_minutes"] == 5

    clock.now = datetime(2025, 12, 10, 17, 5)
    resp = client.post("/api/employees/1/clock-out")
    assert resp.get_json()["data"]["total_hours"] == 8.0

    assert client.get("/api/employees/1/attendance/today").get_json()["data"]["state"] == "completed"

    data = client.get("/api/employees/1/attendance/analytics").get_json()["data"]
    assert data["analytics"]["late_arrivals"] == 1
    assert data["analytics"]["present_days"] == 1
    assert sum(len(week) for week in data["heatmap"]) % 7 == 0

    board = client.get("/api/attendance/today").get_json()["data"]
    assert board["stats"]["present_today"] == 1
    assert client.get("/api/attendance/today?status=bogus").status_code == 400


def test_leave_flow(client):
    _onboard(client)
    _onboard(client, first_name="Admin", email="admin@test.com", is_admin=True)

    body = {"leave_type": "unpaid", "start_date": "2025-12-15", "end_date": "2025-12-16"}
    resp = client.post("/api/employees/1/leaves", json=body)
    assert resp.status_code == 201
    request_id = resp.get_json()["data"]["request_id"]

    resp = client.post("/api/employees/1/leaves", json={**body, "start_date": "2025-12-16", "end_date": "2025-12-16"})
    assert resp.status_code == 400

    assert len(client.get("/api/leaves/pending").get_json()["data"]) == 1
    resp = client.post(f"/api/leaves/{request_id}/approve", json={"approver_id": 2})
    assert resp.get_json()["data"]["status"] == "approved"

    salary = client.get("/api/payroll/salaries/1?year=2025&month=12").get_json()["data"]
    assert salary["unpaid_leave_days"] == 2.0
    assert salary["unpaid_leave_deduction"] == 160.0


def test_payroll_endpoints(client):
    _onboard(client)

    resp = client.put("/api/payroll/settings", json={"hourly_rate": 0, "overtime_multiplier": 0.5})
    assert resp.status_code == 400
    assert set(resp.get_json()["errors"]) == {"hourly_rate", "overtime_multiplier"}

    resp = client.put("/api/payroll/settings", json={"hourly_rate": 12})
    assert resp.get_json()["data"]["hourly_rate"] == 12.0

    assert client.get("/api/payroll/salaries?year=2025&month=13").status_code == 400
    assert len(client.get("/api/payroll/salaries?year=2025&month=12").get_json()["data"]) == 1

    resp = client.post("/api/payroll/salaries/1/snapshot?year=2025&month=12")
    assert resp.status_code == 201
    assert resp.get_json()["data"]["is_provisional"] is True
    assert len(client.get("/api/employees/1/salary-records").get_json()["data"]) == 1


def test_upcoming_holidays(client):
    data = client.get("/api/holidays/upcoming?days=30").get_json()["data"]

    assert [(h["name"], h["occurs_on"]) for h in data] == [("Christmas Day", "2025-12-25")]


def test_past_leave_is_rejected_and_started_leave_cannot_be_cancelled(client, clock):
    _onboard(client)

    resp = client.post("/api/employees/1/leaves", json={"leave_type": "paid", "start_date": "2025-12-01", "end_date": "2025-12-02"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"start_date": "in the past"}

    resp = client.post("/api/employees/1/leaves", json={"leave_type": "paid", "start_date": "2025-12-11", "end_date": "2025-12-12"})
    request_id = resp.get_json()["data"]["request_id"]

    clock.now = datetime(2025, 12, 12, 8, 0)
    assert client.post(f"/api/leaves/{request_id}/cancel", json={"employee_id": 1}).status_code == 400


def test_admin_leave_list_and_departments(client):
    _onboard(client, employee_code="EMP-0001")
    _onboard(client, first_name="Jane", last_name="Smith", email="jane@test.com", department="Sales")

    client.post("/api/employees/1/leaves", json={"leave_type": "paid", "start_date": "2025-12-15", "end_date": "2025-12-15"})
    client.post("/api/employees/2/leaves", json={"leave_type": "sick", "start_date": "2025-12-15", "end_date": "2025-12-15"})

    rows = client.get("/api/leaves").get_json()["data"]
    assert [r["employee"]["first_name"] for r in rows] == ["Jane", "John"]

    rows = client.get("/api/leaves?type=paid&status=all&search=emp-0001").get_json()["data"]
    assert [r["employee_id"] for r in rows] == [1]
    assert client.get("/api/leaves?status=bogus").status_code == 400

    assert client.get("/api/departments").get_json()["data"] == ["Engineering", "Sales"]


def test_upcoming_events(client):
    _onboard(client, join_date="2020-12-20", date_of_birth="1990-12-11")
    _onboard(client, first_name="Jane", email="jane@test.com", join_date="2025-12-12", date_of_birth="1992-01-30")

    data = client.get("/api/events/upcoming").get_json()["data"]
    assert [(e["employee_name"], e["days_until"]) for e in data["birthdays"]] == [("John Doe", 1)]
    assert [(e["employee_name"], e["years_completed"]) for e in data["anniversaries"]] == [("John Doe", 5)]

    assert client.get("/api/events/today").get_json()["data"] == {"birthdays": [], "anniversaries": []}


def test_out_of_range_year_is_a_bad_request(client):
    _onboard(client)

    resp = client.get("/api/employees/1/attendance/analytics?year=10000&month=1")
    assert resp.status_code == 400
    assert "year" in resp.get_json()["errors"]
