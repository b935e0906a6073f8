from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.http import api_errors, arg_choice, arg_int, json_ok
from ..core.constants import DEFAULT_RECENT_DAYS
from ..core.enums import DayStatus
from ..container import Container
from .analytics import build_heatmap


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/clock-in", methods=["POST"], endpoint="api_clock_in")
    @api_errors
    def api_clock_in(employee_id: int):
        entry = container.attendance_service.clock_in(employee_id)
        return json_ok(entry.to_dict(), status=201)

    @app.route("/api/employees/<int:employee_id>/clock-out", methods=["POST"], endpoint="api_clock_out")
    @api_errors
    def api_clock_out(employee_id: int):
        entry = container.attendance_service.clock_out(employee_id)
        return json_ok(entry.to_dict())

    @app.route("/api/employees/<int:employee_id>/attendance/today", endpoint="api_today_status")
    @api_errors
    def api_today_status(employee_id: int):
        return json_ok(container.attendance_service.today_status(employee_id).to_dict())

    @app.route("/api/employees/<int:employee_id>/attendance/analytics", endpoint="api_attendance_analytics")
    @api_errors
    def api_attendance_analytics(employee_id: int):
        today = container.clock().date()
        year = arg_int("year", today.year)
        month = arg_int("month", today.month)

        analytics = container.attendance_service.monthly_analytics(employee_id, year=year, month=month)
        heatmap = [[cell.to_dict() if cell else None for cell in week] for week in build_heatmap(analytics)]
        return json_ok({"analytics": analytics.to_dict(), "heatmap": heatmap})

    @app.route("/api/employees/<int:employee_id>/attendance/recent", endpoint="api_recent_attendance")
    @api_errors
    def api_recent_attendance(employee_id: int):
        days = arg_int("days", DEFAULT_RECENT_DAYS)
        rows = container.attendance_service.recent(employee_id, limit=days)
        return json_ok([r.to_dict() for r in rows])

    @app.route("/api/employees/<int:employee_id>/attendance/months", endpoint="api_attendance_months")
    @api_errors
    def api_attendance_months(employee_id: int):
        months = container.attendance_service.months_with_data(employee_id)
        return json_ok([{"year": y, "month": m} for y, m in months])

    @app.route("/api/attendance/today", endpoint="api_attendance_today")
    @api_errors
    def api_attendance_today():
        status = arg_choice("status", DayStatus)
        department = request.args.get("department") or None
        overview = container.attendance_service.today_overview(
            department=None if department == "all" else department,
            search=request.args.get("search") or None,
            status=status,
        )
        return json_ok(
            {
                "records": [r.to_dict() for r in overview.records],
                "stats": asdict(overview.stats),
            }
        )
