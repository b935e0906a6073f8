from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, arg_int, body_json, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _period() -> tuple[int, int]:
        today = container.clock().date()
        return arg_int("year", today.year), arg_int("month", today.month)

    @app.route("/api/payroll/settings", methods=["GET"], endpoint="api_payroll_settings")
    @api_errors
    def api_payroll_settings():
        return json_ok(container.payroll_settings_service.get_active().to_dict())

    @app.route("/api/payroll/settings", methods=["PUT"], endpoint="api_update_payroll_settings")
    @api_errors
    def api_update_payroll_settings():
        settings = container.payroll_settings_service.update(body_json())
        return json_ok(settings.to_dict())

    @app.route("/api/payroll/salaries", endpoint="api_salaries")
    @api_errors
    def api_salaries():
        year, month = _period()
        rows = container.payroll_service.calculate_for_all(year=year, month=month)
        return json_ok([r.to_dict() for r in rows])

    @app.route("/api/payroll/salaries/<int:employee_id>", endpoint="api_employee_salary")
    @api_errors
    def api_employee_salary(employee_id: int):
        year, month = _period()
        calc = container.payroll_service.calculate_for_employee(employee_id, year=year, month=month)
        return json_ok(calc.to_dict())

    @app.route(
        "/api/payroll/salaries/<int:employee_id>/snapshot",
        methods=["POST"],
        endpoint="api_snapshot_salary",
    )
    @api_errors
    def api_snapshot_salary(employee_id: int):
        year, month = _period()
        record = container.payroll_service.snapshot_salary(
            employee_id, year, month, today=container.clock().date()
        )
        return json_ok(record.to_dict(), status=201)

    @app.route("/api/employees/<int:employee_id>/salary-records", endpoint="api_salary_records")
    @api_errors
    def api_salary_records(employee_id: int):
        rows = container.payroll_service.salary_history(employee_id)
        return json_ok([r.to_dict() for r in rows])
