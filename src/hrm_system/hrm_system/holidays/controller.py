from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, arg_int, json_ok
from ..core.constants import DEFAULT_UPCOMING_HOLIDAY_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays/upcoming", endpoint="api_upcoming_holidays")
    @api_errors
    def api_upcoming_holidays():
        days = arg_int("days", DEFAULT_UPCOMING_HOLIDAY_DAYS)
        rows = container.holiday_service.upcoming(container.clock().date(), days)
        return json_ok([h.to_dict(occurs_on=d) for d, h in rows])
