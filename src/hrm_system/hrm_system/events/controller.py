from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, arg_int, json_ok
from ..core.constants import DEFAULT_UPCOMING_EVENT_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/upcoming", endpoint="api_upcoming_events")
    @api_errors
    def api_upcoming_events():
        days = arg_int("days", DEFAULT_UPCOMING_EVENT_DAYS)
        return json_ok(container.event_service.upcoming(container.clock().date(), days).to_dict())

    @app.route("/api/events/today", endpoint="api_today_events")
    @api_errors
    def api_today_events():
        return json_ok(container.event_service.on_day(container.clock().date()).to_dict())
