from __future__ import annotations

from dataclasses import replace

import pytest

from hrm_system.core.enums import DeductionType
from hrm_system.core.exceptions import NotFoundError, ValidationError
from hrm_system.payroll.model import PayrollSettings
from hrm_system.payroll.settings import PayrollSettingsService, validate_payroll_settings

VALID = {
    "hourly_rate": "25",
    "overtime_multiplier": 1.5,
    "standard_working_days_per_month": 22,
    "deduction_type": "hourly",
    "daily_deduction_rate": 0,
    "currency": "USD",
}


class FakeSettingsRepo:
    def __init__(self, current=None):
        self.current = current
        self.saved = []

    def get_active(self):
        return self.current

    def save(self, settings):
        self.saved.append(settings)
        self.current = replace(settings, settings_id=settings.settings_id or 1)
        return self.current.settings_id


def test_valid_settings_are_coerced():
    settings = validate_payroll_settings(VALID)

    assert settings.hourly_rate == 25.0
    assert settings.deduction_type == DeductionType.HOURLY
    assert settings.standard_working_days_per_month == 22


def test_every_violation_is_reported_together():
    data = {
        "hourly_rate": 0,
        "overtime_multiplier": 0.9,
        "standard_working_days_per_month": 32,
        "deduction_type": "weekly",
        "currency": " ",
    }

    with pytest.raises(ValidationError) as exc:
        validate_payroll_settings(data)

    assert set(exc.value.errors) == {
        "hourly_rate",
        "overtime_multiplier",
        "standard_working_days_per_month",
        "deduction_type",
        "currency",
    }


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"hourly_rate": -1}, "hourly_rate"),
        ({"hourly_rate": "abc"}, "hourly_rate"),
        ({"overtime_multiplier": None}, "overtime_multiplier"),
        ({"standard_working_days_per_month": 0}, "standard_working_days_per_month"),
        ({"standard_working_days_per_month": 21.5}, "standard_working_days_per_month"),
        ({"deduction_type": "daily", "daily_deduction_rate": -5}, "daily_deduction_rate"),
    ],
)
def test_single_rule_violations(overrides, field):
    with pytest.raises(ValidationError) as exc:
        validate_payroll_settings({**VALID, **overrides})
    assert list(exc.value.errors) == [field]


def test_boundaries_are_accepted():
    settings = validate_payroll_settings(
        {
            **VALID,
            "overtime_multiplier": 1,
            "standard_working_days_per_month": 31,
            "deduction_type": "daily",
            "daily_deduction_rate": 0,
        }
    )

    assert settings.overtime_multiplier == 1.0
    assert settings.deduction_type == DeductionType.DAILY


def test_service_merges_partial_update():
    repo = FakeSettingsRepo(PayrollSettings(settings_id=3, hourly_rate=20.0))
    svc = PayrollSettingsService(repo)

    updated = svc.update({"hourly_rate": 30, "deduction_type": "daily", "daily_deduction_rate": 240})

    assert updated.settings_id == 3
    assert updated.hourly_rate == 30.0
    assert updated.deduction_type == DeductionType.DAILY
    assert updated.overtime_multiplier == 1.5
    assert updated.currency == "USD"


def test_service_rejects_invalid_or_unknown_fields_without_saving():
    repo = FakeSettingsRepo(PayrollSettings(settings_id=3, hourly_rate=20.0))
    svc = PayrollSettingsService(repo)

    with pytest.raises(ValidationError):
        svc.update({"hourly_rate": 0})
    with pytest.raises(ValidationError):
        svc.update({"bonus": 10})
    assert repo.saved == []


def test_missing_settings_is_not_found():
    with pytest.raises(NotFoundError):
        PayrollSettingsService(FakeSettingsRepo()).get_active()
