from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import UNKNOWN_NAME


def unwrap_envelope(payload: Any) -> Any:
    """Strip the ``{"statusCode", "data", "message"}`` envelope the API wraps results in."""

    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def error_message(resp, fallback: str) -> str:
    """Server-provided ``message`` of a failed response, else ``fallback``."""

    try:
        body = resp.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return fallback


def ref_id(value: Any) -> Optional[str]:
    """Id of a reference that may be populated (``{"_id": ...}``) or a bare id."""

    if value is None:
        return None
    if isinstance(value, dict):
        rid = value.get("_id") or value.get("id")
        return str(rid) if rid else None
    return str(value)


def ref_name(value: Any, default: str = UNKNOWN_NAME) -> str:
    if isinstance(value, dict):
        return value.get("name") or default
    return default


def ref_list(values: Any) -> list[str]:
    return [rid for rid in (ref_id(v) for v in (values or [])) if rid]


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse the ISO-8601 timestamps the backend sends (``Z`` suffix included)."""

    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    dt = parse_datetime(value)
    if dt:
        return dt.date()
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None


def as_list(value: Any) -> list:
    """Lists come back bare or as a paginated ``{"docs": [...]}`` / ``{"data": [...]}``."""

    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        for key in ("docs", "data", "items"):
            if isinstance(value.get(key), list):
                return value[key]
    return []
