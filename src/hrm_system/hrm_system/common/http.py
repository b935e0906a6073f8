from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from enum import Enum
from typing import Any, Optional, TypeVar

from flask import jsonify, request

from ..core.exceptions import DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def json_ok(payload: Any = None, *, status: int = 200):
    body = {"success": True}
    if payload is not None:
        body["data"] = payload
    return jsonify(body), status


def json_error(message: str, *, status: int, errors: Optional[dict] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def api_errors(view):
    """Translate domain exceptions raised by services into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return json_error(str(e), status=404)
        except ValidationError as e:
            return json_error(str(e), status=400, errors=e.errors)
        except DomainError as e:
            return json_error(str(e), status=400)
        except Exception:
            logger.exception("api_request_failed", extra={"path": request.path, "method": request.method})
            return json_error("Internal server error", status=500)

    return wrapper


def arg_int(name: str, default: Optional[int] = None) -> int:
    raw = request.args.get(name)
    if raw in (None, ""):
        if default is None:
            raise ValidationError(f"Missing query parameter: {name}", errors={name: "required"})
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid query parameter: {name}", errors={name: "invalid"}) from e


def arg_choice(name: str, choices: type[E]) -> Optional[E]:
    """Optional enum filter from the query string; missing or "all" means no filter."""

    raw = request.args.get(name) or None
    if raw is None or raw == "all":
        return None
    try:
        return choices(raw)
    except ValueError as e:
        raise ValidationError(f"Unknown {name} filter: {raw}", errors={name: "invalid"}) from e


def body_json() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def body_date(data: dict, name: str) -> date:
    raw = data.get(name)
    if not raw:
        raise ValidationError(f"{name} is required", errors={name: "required"})
    try:
        return parse_iso_date(str(raw))
    except ValueError as e:
        raise ValidationError(f"{name} must be YYYY-MM-DD", errors={name: "invalid"}) from e
