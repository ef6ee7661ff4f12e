from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from flask import jsonify, request

from ..common.datetime_utils import parse_instant, parse_iso_date
from ..core.exceptions import ValidationError


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_date_arg(value: Optional[str], *, default: date) -> date:
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")


def parse_time_arg(value: Optional[str], field_name: str) -> time:
    v = (value or "").strip()
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid time (HH:MM)")


def parse_instant_arg(value: Optional[str], field_name: str) -> datetime:
    try:
        return parse_instant(value or "")
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid timestamp")


def write_result(container, ok: bool, **extra: Any):
    """Response for an action that appended to the remote log."""
    notice = container.coordinator.notices.latest
    body = {
        "ok": ok,
        "status": container.coordinator.status.value,
        "message": notice.message if notice else "",
    }
    body.update(extra)
    return jsonify(body), 200 if ok else 502
