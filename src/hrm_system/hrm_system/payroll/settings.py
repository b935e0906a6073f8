from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import to_float
from ..core.constants import MAX_WORKING_DAYS_PER_MONTH
from ..core.enums import DeductionType
from ..core.exceptions import NotFoundError, ValidationError
from .model import PayrollSettings
from .repository import PayrollSettingsRepository

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = (
    "hourly_rate",
    "overtime_multiplier",
    "standard_working_days_per_month",
    "deduction_type",
    "daily_deduction_rate",
    "currency",
)


def validate_payroll_settings(data: Mapping[str, Any]) -> PayrollSettings:
    """Check every settings rule and build the settings object.

    All violations are collected and raised together as one ValidationError.
    """

    errors: dict[str, str] = {}

    def number(name: str, parser, default: Any = None) -> Any:
        raw = data.get(name)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            if default is None:
                errors[name] = "required"
            return default
        try:
            return parser(raw)
        except (TypeError, ValueError):
            errors[name] = "must be a number"
            return None

    hourly_rate = number("hourly_rate", to_float)
    multiplier = number("overtime_multiplier", to_float)
    working_days = number("standard_working_days_per_month", _to_int)
    daily_rate = number("daily_deduction_rate", to_float, 0.0)

    deduction_type = None
    try:
        deduction_type = DeductionType(str(data.get("deduction_type") or "").strip())
    except ValueError:
        errors["deduction_type"] = f"must be one of: {', '.join(t.value for t in DeductionType)}"

    currency = str(data.get("currency") or "").strip()
    if not currency:
        errors["currency"] = "required"

    if hourly_rate is not None and hourly_rate <= 0:
        errors["hourly_rate"] = "must be greater than 0"
    if multiplier is not None and multiplier < 1:
        errors["overtime_multiplier"] = "must be at least 1"
    if working_days is not None and not 1 <= working_days <= MAX_WORKING_DAYS_PER_MONTH:
        errors["standard_working_days_per_month"] = f"must be between 1 and {MAX_WORKING_DAYS_PER_MONTH}"
    if deduction_type == DeductionType.DAILY and daily_rate is not None and daily_rate < 0:
        errors["daily_deduction_rate"] = "cannot be negative for daily deductions"

    if errors:
        raise ValidationError("Invalid payroll settings", errors=errors)

    return PayrollSettings(
        settings_id=data.get("settings_id"),
        hourly_rate=hourly_rate,
        overtime_multiplier=multiplier,
        standard_working_days_per_month=working_days,
        deduction_type=deduction_type,
        daily_deduction_rate=daily_rate,
        currency=currency,
    )


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"Not a whole number: {value!r}")
    return int(number)


class PayrollSettingsService:
    def __init__(self, settings: PayrollSettingsRepository):
        self._settings = settings

    def get_active(self) -> PayrollSettings:
        current = self._settings.get_active()
        if current is None:
            raise NotFoundError("Payroll settings have not been configured")
        return current

    def update(self, changes: Mapping[str, Any]) -> PayrollSettings:
        """Merge a partial update over the active settings, validate, and save."""

        unknown = sorted(set(changes) - set(SETTINGS_FIELDS))
        if unknown:
            raise ValidationError(
                f"Unknown settings field(s): {', '.join(unknown)}",
                errors={name: "unknown field" for name in unknown},
            )

        current = self._settings.get_active()
        merged: dict[str, Any] = current.to_dict() if current else {}
        merged.update(changes)

        validated = validate_payroll_settings(merged)
        settings_id = self._settings.save(validated)
        logger.info(
            "payroll_settings_updated",
            extra={"settings_id": settings_id, "fields": sorted(changes)},
        )
        return self.get_active()
