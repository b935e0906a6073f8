from __future__ import annotations

from datetime import MAXYEAR
from typing import Any, Callable, Mapping, Optional, TypeVar

from ..core.exceptions import ValidationError

T = TypeVar("T")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required", errors={field_name: "required"})
    return str(value).strip()


def require_field(row: Mapping[str, Any], field_name: str) -> Any:
    value = row.get(field_name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required", errors={field_name: "required"})
    return value


def parse_field(row: Mapping[str, Any], field_name: str, parser: Callable[[Any], T], *, default: Optional[T] = None) -> T:
    """Run ``parser`` over a row field, turning parse failures into ValidationError.

    Missing or blank values fall back to ``default``; with no default the
    field is required.
    """

    value = row.get(field_name)
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"{field_name} is required", errors={field_name: "required"})
        return default

    try:
        return parser(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} is invalid: {value!r}", errors={field_name: "invalid"}) from e


def parse_optional(row: Mapping[str, Any], field_name: str, parser: Callable[[Any], T]) -> Optional[T]:
    if row.get(field_name) in (None, ""):
        return None
    return parse_field(row, field_name, parser)


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    return float(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "on"}:
            return True
        if v in {"0", "false", "no", "off", ""}:
            return False
        raise ValueError(f"Invalid boolean: {value!r}")
    return bool(value)


def require_period(year: int, month: int, *, min_year: int = 1) -> tuple[int, int]:
    """Validate a (year, month) pair and return it as ints."""

    try:
        year_i, month_i = int(year), int(month)
    except (TypeError, ValueError) as e:
        raise ValidationError("Invalid period", errors={"year": "invalid", "month": "invalid"}) from e

    errors: dict[str, str] = {}
    if not 1 <= month_i <= 12:
        errors["month"] = "must be between 1 and 12"
    if not min_year <= year_i <= MAXYEAR:
        errors["year"] = f"must be between {min_year} and {MAXYEAR}"
    if errors:
        raise ValidationError(f"Invalid period {year}-{month}", errors=errors)
    return year_i, month_i
