"""Turn raw log rows into typed events and fold them into a projection.

Rows come from the remote store as lists of up to six loosely typed cells:
actor, action, timestamp, date, time, source. The normalizer is total over
arbitrary input: rows it cannot use are dropped with a logged diagnostic.
"""

from __future__ import annotations

import logging
import unicodedata
from collections import defaultdict
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import parse_instant, parse_iso_date
from ..core.constants import ROW_WIDTH, SYSTEM_ACTOR
from ..core.enums import EventAction
from ..core.exceptions import ParseError
from .model import DailyLog, Event, LogProjection, RosterState

logger = logging.getLogger(__name__)


def _cell(row: Sequence[Any], index: int) -> Optional[str]:
    if index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    text = str(value)
    return text if text else None


def parse_row(row: Any) -> Optional[Event]:
    """Parse one raw row.

    Returns None for rows without an action. Raises ParseError when the row
    has the wrong shape or an attendance row lacks a usable timestamp/date.
    """
    if not isinstance(row, (list, tuple)):
        raise ParseError(f"expected a list of cells, got {type(row).__name__}")
    if not row:
        return None

    actor, action_text, timestamp_text, date_text, time_text, source = (_cell(row, i) for i in range(ROW_WIDTH))
    if not action_text:
        return None

    action = EventAction.parse(action_text)
    if not action.is_attendance:
        return Event(action=action, actor=actor, source=source, raw_action=action_text)

    if not actor or not timestamp_text or not date_text:
        raise ParseError("attendance row is missing actor, timestamp or date")
    try:
        timestamp = parse_instant(timestamp_text)
    except ValueError as exc:
        raise ParseError(f"invalid timestamp {timestamp_text!r} for {actor} on {date_text}") from exc
    try:
        work_date = parse_iso_date(date_text)
    except ValueError as exc:
        raise ParseError(f"invalid date {date_text!r} for {actor}") from exc

    return Event(
        action=action,
        actor=actor,
        timestamp=timestamp,
        work_date=work_date,
        time_text=time_text,
        source=source,
        raw_action=action_text,
    )


def apply_event(state: RosterState, event: Event) -> RosterState:
    """Pure reducer: (prior roster state, event) -> new roster state."""
    actor = event.actor
    if event.action == EventAction.ADMIN_PASSWORD_CHANGED:
        if actor:
            return RosterState(seen=state.seen, removed=state.removed, passphrase=actor)
        return state

    if not actor:
        return state

    if event.action == EventAction.EMPLOYEE_ADDED:
        return RosterState(seen=state.seen | {actor}, removed=state.removed - {actor}, passphrase=state.passphrase)
    if event.action == EventAction.EMPLOYEE_REMOVED:
        return RosterState(seen=state.seen, removed=state.removed | {actor}, passphrase=state.passphrase)

    # check-in/check-out and unknown kinds only register the name
    if actor in state.seen:
        return state
    return RosterState(seen=state.seen | {actor}, removed=state.removed, passphrase=state.passphrase)


def roster_sort_key(name: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering, ties broken by the raw name."""
    folded = unicodedata.normalize("NFKD", name).casefold()
    base = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return base, name


def sort_roster(names: Iterable[str]) -> list[str]:
    return sorted(names, key=roster_sort_key)


def finalize_roster(state: RosterState) -> tuple[str, ...]:
    active = (name for name in state.seen if name not in state.removed and name != SYSTEM_ACTOR)
    return tuple(sort_roster(active))


def normalize_rows(rows: Iterable[Any]) -> LogProjection:
    """Fold raw rows (header already removed) into a LogProjection.

    Row numbers in diagnostics are 1-based and count the header row, so they
    match what an operator sees in the spreadsheet.
    """
    state = RosterState()
    grouped: dict[str, dict[date, list[DailyLog]]] = defaultdict(lambda: defaultdict(list))

    for index, row in enumerate(rows):
        row_number = index + 2
        try:
            event = parse_row(row)
        except ParseError as exc:
            logger.warning("Skipping log row %d: %s", row_number, exc, extra={"row": row_number})
            continue
        except Exception:
            logger.error("Error processing log row %d: %r", row_number, row, exc_info=True)
            continue

        if event is None:
            continue

        state = apply_event(state, event)
        if event.action.is_attendance:
            grouped[event.actor][event.work_date].append(DailyLog(action=event.action, timestamp=event.timestamp))

    logs = {
        employee: {work_date: tuple(sorted(day_logs, key=lambda log: log.timestamp)) for work_date, day_logs in dates.items()}
        for employee, dates in grouped.items()
    }
    return LogProjection(logs=logs, roster=finalize_roster(state), passphrase=state.passphrase)
