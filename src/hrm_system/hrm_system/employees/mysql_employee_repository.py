from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, employee_code, first_name, last_name, email, department, designation,
    join_date, date_of_birth, standard_shift_start, standard_shift_end, standard_hours_per_day,
    is_admin, is_active
"""

# Columns an admin/profile edit may write.
EDITABLE_COLUMNS = (
    "employee_code",
    "first_name",
    "last_name",
    "email",
    "department",
    "designation",
    "join_date",
    "date_of_birth",
    "standard_shift_start",
    "standard_shift_end",
    "standard_hours_per_day",
    "is_admin",
)


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return Employee.from_row(row) if row else None

    def list_active(self, *, include_admins: bool = True) -> Sequence[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees WHERE is_active=1"
        if not include_admins:
            sql += " AND is_admin=0"
        sql += " ORDER BY first_name, last_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql)
            return [Employee.from_row(r) for r in fetchall(cur)]

    def create(self, fields: Mapping[str, Any]) -> int:
        cols = [c for c in EDITABLE_COLUMNS if c in fields]
        placeholders = ",".join(["%s"] * len(cols))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO employees({', '.join(cols)}, is_active) VALUES({placeholders}, 1)",
                tuple(fields[c] for c in cols),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, fields: Mapping[str, Any]) -> bool:
        cols = [c for c in EDITABLE_COLUMNS if c in fields]
        if not cols:
            return False

        assignments = ", ".join(f"{c}=%s" for c in cols)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                (*[fields[c] for c in cols], int(employee_id)),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s WHERE employee_id=%s",
                (1 if is_active else 0, int(employee_id)),
            )
            return cur.rowcount > 0

    def list_departments(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT department
                FROM employees
                WHERE department IS NOT NULL AND department <> ''
                ORDER BY department
                """
            )
            return [r["department"] for r in fetchall(cur)]
