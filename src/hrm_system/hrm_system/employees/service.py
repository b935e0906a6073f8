from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = (
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


def _validated_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate profile fields by parsing them as an Employee.

    Returns the normalized column values ready for the repository.
    """

    candidate = Employee.from_row({**fields, "employee_id": 0})
    if candidate.standard_shift_end <= candidate.standard_shift_start:
        raise ValidationError(
            "Shift end must be after shift start",
            errors={"standard_shift_end": "must be after standard_shift_start"},
        )

    return {
        "employee_code": candidate.employee_code,
        "first_name": candidate.first_name,
        "last_name": candidate.last_name,
        "email": candidate.email,
        "department": candidate.department,
        "designation": candidate.designation,
        "join_date": candidate.join_date,
        "date_of_birth": candidate.date_of_birth,
        "standard_shift_start": candidate.standard_shift_start,
        "standard_shift_end": candidate.standard_shift_end,
        "standard_hours_per_day": candidate.standard_hours_per_day,
        "is_admin": 1 if candidate.is_admin else 0,
    }


class EmployeeService:
    """Use case: employee directory (onboarding, profile edits, deactivation)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def list_active(self, *, include_admins: bool = True) -> Sequence[Employee]:
        return self._employees.list_active(include_admins=include_admins)

    def list_departments(self) -> list[str]:
        return list(self._employees.list_departments())

    def onboard(self, fields: Mapping[str, Any]) -> Employee:
        require_non_empty(fields.get("first_name", ""), "first_name")
        require_non_empty(fields.get("email", ""), "email")

        employee_id = self._employees.create(_validated_fields(fields))
        logger.info("employee_onboarded", extra={"employee_id": employee_id})
        return self.get_employee(employee_id)

    def update_profile(self, employee_id: int, changes: Mapping[str, Any]) -> Employee:
        current = self.get_employee(employee_id)

        unknown = sorted(set(changes) - set(_PROFILE_FIELDS))
        if unknown:
            raise ValidationError(
                f"Unknown profile fields: {', '.join(unknown)}",
                errors={name: "unknown field" for name in unknown},
            )

        merged = {**current.to_dict(), **changes}
        self._employees.update(current.employee_id, _validated_fields(merged))
        logger.info("employee_updated", extra={"employee_id": current.employee_id, "fields": sorted(changes)})
        return self.get_employee(current.employee_id)

    def deactivate(self, employee_id: int) -> None:
        employee = self.get_employee(employee_id)
        if not employee.is_active:
            raise ValidationError("Employee is already inactive")

        if not self._employees.set_active(employee.employee_id, is_active=False):
            raise ValidationError("Deactivating employee failed")
        logger.info("employee_deactivated", extra={"employee_id": employee.employee_id})
