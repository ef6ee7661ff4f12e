from __future__ import annotations

from datetime import datetime, timezone

from ..common.datetime_utils import format_instant
from ..core.enums import EventAction


def build_event_row(action: EventAction, actor: str, at: datetime, source: str) -> list[str]:
    """Row layout: actor, action, timestamp, date, time, source (all UTC)."""
    utc = at.astimezone(timezone.utc)
    return [
        actor,
        action.value,
        format_instant(utc),
        utc.strftime("%Y-%m-%d"),
        utc.strftime("%H:%M:%S"),
        source,
    ]
