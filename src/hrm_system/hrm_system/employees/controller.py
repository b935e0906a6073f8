from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, body_json, json_ok
from ..common.validators import to_bool
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="api_list_employees")
    @api_errors
    def api_list_employees():
        include_admins = to_bool(request.args.get("include_admins", "true"))
        rows = container.employee_service.list_active(include_admins=include_admins)
        return json_ok([e.to_dict() for e in rows])

    @app.route("/api/employees", methods=["POST"], endpoint="api_onboard_employee")
    @api_errors
    def api_onboard_employee():
        employee = container.employee_service.onboard(body_json())
        return json_ok(employee.to_dict(), status=201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="api_get_employee")
    @api_errors
    def api_get_employee(employee_id: int):
        return json_ok(container.employee_service.get_employee(employee_id).to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="api_update_employee")
    @api_errors
    def api_update_employee(employee_id: int):
        employee = container.employee_service.update_profile(employee_id, body_json())
        return json_ok(employee.to_dict())

    @app.route("/api/employees/<int:employee_id>/deactivate", methods=["POST"], endpoint="api_deactivate_employee")
    @api_errors
    def api_deactivate_employee(employee_id: int):
        container.employee_service.deactivate(employee_id)
        return json_ok({"employee_id": employee_id, "is_active": False})

    @app.route("/api/departments", endpoint="api_list_departments")
    @api_errors
    def api_list_departments():
        return json_ok(container.employee_service.list_departments())
