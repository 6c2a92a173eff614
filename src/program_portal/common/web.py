"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from .datetime_utils import parse_iso_date
from ..core.enums import Role, parse_enum
from ..core.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    SessionExpiredError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def current_role() -> Optional[Role]:
    return parse_enum(Role, session.get("role"), None)


def current_user_id() -> Optional[str]:
    return session.get("user_id")


def ok(message: str = "", status: int = 200, **payload):
    body = {"success": True, "message": message}
    body.update(payload)
    return jsonify(body), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please sign in to continue.", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Allow only the listed roles; other signed-in users get 403."""

    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Please sign in to continue.", 401)
            if session.get("role") not in allowed:
                return fail("You do not have access to this page.", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def handle_errors(fallback: str):
    """Turn domain/API exceptions raised by a view into the JSON error shape.

    The server's message is shown when there is one, ``fallback`` otherwise.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return fail(str(e) or fallback, 400)
            except AuthenticationError as e:
                return fail(str(e) or fallback, 401)
            except AuthorizationError as e:
                return fail(str(e) or fallback, 403)
            except SessionExpiredError:
                session.clear()
                return fail("Your session has expired. Please sign in again.", 401)
            except ApiError as e:
                return fail(e.message or fallback, e.status_code or 502)
            except Exception:
                logger.exception("Unhandled error in %s %s", request.method, request.path)
                return fail(fallback, 500)

        return wrapper

    return decorator


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def arg_int(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def dump(value):
    """JSON-ready copy of models: dataclasses to dicts, enums to values, dates to ISO strings."""

    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: dump(getattr(value, f.name)) for f in fields(value) if f.repr}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: dump(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [dump(v) for v in value]
    return value


def arg_date(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return parse_iso_date(raw[:10])
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)")
