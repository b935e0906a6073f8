from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    request_id, employee_id, leave_type, start_date, end_date, is_half_day,
    total_days, reason, status, approver_id, approver_comment, decided_at, created_at
"""


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            row = fetchone(cur)
            return LeaveRequest.from_row(row) if row else None

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE employee_id=%s ORDER BY start_date DESC",
                (int(employee_id),),
            )
            return [LeaveRequest.from_row(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE status=%s ORDER BY created_at ASC",
                (status.value,),
            )
            return [LeaveRequest.from_row(r) for r in fetchall(cur)]

    def list_requests(
        self,
        *,
        leave_type: Optional[LeaveType] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []

        if leave_type is not None:
            clauses.append("leave_type=%s")
            params.append(leave_type.value)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests {where} ORDER BY created_at DESC, request_id DESC",
                tuple(params),
            )
            return [LeaveRequest.from_row(r) for r in fetchall(cur)]

    def list_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["start_date <= %s", "end_date >= %s"]
        params: list[object] = [end_date, start_date]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE {where} ORDER BY start_date ASC",
                tuple(params),
            )
            return [LeaveRequest.from_row(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, start_date, end_date, is_half_day, total_days, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    1 if is_half_day else 0,
                    total_days,
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def set_status(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approver_id: Optional[int],
        approver_comment: Optional[str],
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approver_id=%s, approver_comment=%s, decided_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    approver_id,
                    approver_comment,
                    decided_at,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_balances(self, employee_id: int, year: int) -> Sequence[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, leave_type, year, total_days, used_days, remaining_days
                FROM leave_balances
                WHERE employee_id=%s AND year=%s
                ORDER BY leave_type ASC
                """,
                (int(employee_id), int(year)),
            )
            return [LeaveBalance.from_row(r) for r in fetchall(cur)]
