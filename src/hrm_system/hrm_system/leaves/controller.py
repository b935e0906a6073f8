from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, arg_choice, arg_int, body_date, body_json, json_ok
from ..common.validators import parse_field, to_bool
from ..core.enums import LeaveStatus, LeaveType
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/leaves", methods=["GET"], endpoint="api_list_leaves")
    @api_errors
    def api_list_leaves(employee_id: int):
        rows = container.leave_service.list_for_employee(employee_id)
        return json_ok([r.to_dict() for r in rows])

    @app.route("/api/employees/<int:employee_id>/leaves", methods=["POST"], endpoint="api_submit_leave")
    @api_errors
    def api_submit_leave(employee_id: int):
        data = body_json()
        req = container.leave_service.submit_request(
            employee_id=employee_id,
            leave_type=parse_field(data, "leave_type", LeaveType),
            start_date=body_date(data, "start_date"),
            end_date=body_date(data, "end_date"),
            is_half_day=parse_field(data, "is_half_day", to_bool, default=False),
            reason=str(data.get("reason") or ""),
        )
        return json_ok(req.to_dict(), status=201)

    @app.route("/api/employees/<int:employee_id>/leave-balances", endpoint="api_leave_balances")
    @api_errors
    def api_leave_balances(employee_id: int):
        year = arg_int("year", container.clock().year)
        rows = container.leave_service.get_balances(employee_id, year)
        return json_ok([b.to_dict() for b in rows])

    @app.route("/api/leaves", endpoint="api_list_all_leaves")
    @api_errors
    def api_list_all_leaves():
        rows = container.leave_service.list_requests(
            leave_type=arg_choice("type", LeaveType),
            status=arg_choice("status", LeaveStatus),
            search=request.args.get("search") or None,
        )
        return json_ok([r.to_dict() for r in rows])

    @app.route("/api/leaves/pending", endpoint="api_pending_leaves")
    @api_errors
    def api_pending_leaves():
        return json_ok([r.to_dict() for r in container.leave_service.list_pending()])

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="api_approve_leave")
    @api_errors
    def api_approve_leave(request_id: int):
        data = body_json()
        req = container.leave_service.approve(
            request_id,
            approver_id=parse_field(data, "approver_id", int),
            comment=str(data.get("comment") or ""),
        )
        return json_ok(req.to_dict())

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="api_reject_leave")
    @api_errors
    def api_reject_leave(request_id: int):
        data = body_json()
        req = container.leave_service.reject(
            request_id,
            approver_id=parse_field(data, "approver_id", int),
            comment=str(data.get("comment") or ""),
        )
        return json_ok(req.to_dict())

    @app.route("/api/leaves/<int:request_id>/cancel", methods=["POST"], endpoint="api_cancel_leave")
    @api_errors
    def api_cancel_leave(request_id: int):
        data = body_json()
        req = container.leave_service.cancel(request_id, employee_id=parse_field(data, "employee_id", int))
        return json_ok(req.to_dict())
