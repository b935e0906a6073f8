from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollSettings, SalaryRecord


class PayrollSettingsRepository(Protocol):
    def get_active(self) -> Optional[PayrollSettings]:
        raise NotImplementedError

    def save(self, settings: PayrollSettings) -> int:
        """Update the row named by ``settings_id`` or insert a new active row."""

        raise NotImplementedError


class SalaryRecordRepository(Protocol):
    def get_for_period(self, employee_id: int, year: int, month: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def insert(self, record: SalaryRecord) -> int:
        """Store a new record; raises DuplicateRecordError when the period already has one."""

        raise NotImplementedError
