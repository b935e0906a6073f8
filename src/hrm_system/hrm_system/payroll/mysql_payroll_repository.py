from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_as_domain_error, fetchall, fetchone
from .model import PayrollSettings, SalaryRecord
from .repository import PayrollSettingsRepository, SalaryRecordRepository

_RECORD_COLUMNS = """
    record_id, employee_id, period_month, period_year, total_hours_worked, overtime_hours,
    unpaid_leave_days, base_pay, overtime_pay, allowances, unpaid_leave_deduction,
    other_deductions, net_pay, is_provisional, notes, created_at
"""


class MySQLPayrollSettingsRepository(PayrollSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self) -> Optional[PayrollSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT settings_id, hourly_rate, overtime_multiplier, standard_working_days_per_month,
                       deduction_type, daily_deduction_rate, currency
                FROM payroll_settings
                WHERE is_active=1
                ORDER BY settings_id DESC
                LIMIT 1
                """
            )
            row = fetchone(cur)
            return PayrollSettings.from_row(row) if row else None

    def save(self, settings: PayrollSettings) -> int:
        params = (
            settings.hourly_rate,
            settings.overtime_multiplier,
            settings.standard_working_days_per_month,
            settings.deduction_type.value,
            settings.daily_deduction_rate,
            settings.currency,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if settings.settings_id is not None:
                cur.execute(
                    """
                    UPDATE payroll_settings
                    SET hourly_rate=%s, overtime_multiplier=%s, standard_working_days_per_month=%s,
                        deduction_type=%s, daily_deduction_rate=%s, currency=%s
                    WHERE settings_id=%s
                    """,
                    params + (int(settings.settings_id),),
                )
                return int(settings.settings_id)

            cur.execute("UPDATE payroll_settings SET is_active=0 WHERE is_active=1")
            cur.execute(
                """
                INSERT INTO payroll_settings(
                    hourly_rate, overtime_multiplier, standard_working_days_per_month,
                    deduction_type, daily_deduction_rate, currency, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                params,
            )
            return int(cur.lastrowid)


class MySQLSalaryRecordRepository(SalaryRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_period(self, employee_id: int, year: int, month: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM salary_records
                WHERE employee_id=%s AND period_year=%s AND period_month=%s
                """,
                (int(employee_id), int(year), int(month)),
            )
            row = fetchone(cur)
            return SalaryRecord.from_row(row) if row else None

    def list_for_employee(self, employee_id: int) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM salary_records
                WHERE employee_id=%s
                ORDER BY period_year DESC, period_month DESC
                """,
                (int(employee_id),),
            )
            return [SalaryRecord.from_row(r) for r in fetchall(cur)]

    def insert(self, record: SalaryRecord) -> int:
        period = f"{record.period_year}-{record.period_month:02d}"
        with duplicate_key_as_domain_error(f"Employee {record.employee_id} already has a salary record for {period}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salary_records(
                        employee_id, period_month, period_year, total_hours_worked, overtime_hours,
                        unpaid_leave_days, base_pay, overtime_pay, allowances, unpaid_leave_deduction,
                        other_deductions, net_pay, is_provisional, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(record.employee_id),
                        int(record.period_month),
                        int(record.period_year),
                        record.total_hours_worked,
                        record.overtime_hours,
                        record.unpaid_leave_days,
                        record.base_pay,
                        record.overtime_pay,
                        record.allowances,
                        record.unpaid_leave_deduction,
                        record.other_deductions,
                        record.net_pay,
                        1 if record.is_provisional else 0,
                        record.notes,
                    ),
                )
                return int(cur.lastrowid)
