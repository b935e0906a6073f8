from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_as_domain_error, fetchall, fetchone
from .model import TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = """
    entry_id, employee_id, work_date, clock_in, clock_out,
    total_hours, overtime_hours, is_late, late_by_minutes, is_early_leave, notes
"""


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_entries WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            row = fetchone(cur)
            return TimeEntry.from_row(row) if row else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_entries WHERE {where} ORDER BY work_date DESC",
                tuple(params),
            )
            return [TimeEntry.from_row(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE work_date=%s", (work_date,))
            return [TimeEntry.from_row(r) for r in fetchall(cur)]

    def list_for_period(self, *, start_date: date, end_date: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE work_date BETWEEN %s AND %s
                ORDER BY employee_id ASC, work_date ASC
                """,
                (start_date, end_date),
            )
            return [TimeEntry.from_row(r) for r in fetchall(cur)]

    def create_clock_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        is_late: bool,
        late_by_minutes: int,
    ) -> int:
        with duplicate_key_as_domain_error(f"Employee {employee_id} already has a time entry on {work_date}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_entries(employee_id, work_date, clock_in, is_late, late_by_minutes)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, clock_in, 1 if is_late else 0, int(late_by_minutes)),
                )
                return int(cur.lastrowid)

    def update_clock_out(
        self,
        *,
        entry_id: int,
        clock_out: datetime,
        total_hours: float,
        overtime_hours: float,
        is_early_leave: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_out=%s, total_hours=%s, overtime_hours=%s, is_early_leave=%s
                WHERE entry_id=%s AND clock_out IS NULL
                """,
                (clock_out, total_hours, overtime_hours, 1 if is_early_leave else 0, int(entry_id)),
            )
            return cur.rowcount > 0
