from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_time_entry_repository import MySQLTimeEntryRepository
from .attendance.repository import TimeEntryRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .events.service import EventService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollSettingsRepository, MySQLSalaryRecordRepository
from .payroll.repository import PayrollSettingsRepository, SalaryRecordRepository
from .payroll.service import PayrollService
from .payroll.settings import PayrollSettingsService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    time_entries_repo: TimeEntryRepository
    leaves_repo: LeaveRepository
    holidays_repo: HolidayRepository
    payroll_settings_repo: PayrollSettingsRepository
    salary_records_repo: SalaryRecordRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    holiday_service: HolidayService
    event_service: EventService
    payroll_settings_service: PayrollSettingsService
    payroll_service: PayrollService

    clock: Callable[[], datetime] = now_local


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    time_entries_repo: TimeEntryRepository,
    leaves_repo: LeaveRepository,
    holidays_repo: HolidayRepository,
    payroll_settings_repo: PayrollSettingsRepository,
    salary_records_repo: SalaryRecordRepository,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build every service on top of the given repositories."""

    return Container(
        employees_repo=employees_repo,
        time_entries_repo=time_entries_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        payroll_settings_repo=payroll_settings_repo,
        salary_records_repo=salary_records_repo,
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(
            time_entries_repo,
            employees_repo,
            strategy_factory=AttendanceStrategyFactory(),
            clock=clock,
        ),
        leave_service=LeaveService(leaves_repo, employees_repo, clock=clock),
        holiday_service=HolidayService(holidays_repo),
        event_service=EventService(employees_repo),
        payroll_settings_service=PayrollSettingsService(payroll_settings_repo),
        payroll_service=PayrollService(
            payroll_settings_repo,
            salary_records_repo,
            employees_repo,
            time_entries_repo,
            leaves_repo,
            clock=clock,
        ),
        clock=clock,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        payroll_settings_repo=MySQLPayrollSettingsRepository(conn),
        salary_records_repo=MySQLSalaryRecordRepository(conn),
    )
