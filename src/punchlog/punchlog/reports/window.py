"""Calendar-aligned report windows (day, Sunday-to-Saturday week, month)."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Mapping

from ..core.constants import WEEK_START
from ..core.enums import Granularity
from ..summaries.model import DailySummary


def week_range(reference: date, *, week_start: int = WEEK_START) -> tuple[date, date]:
    """Start and end (inclusive) of the 7-day week containing ``reference``."""
    start = reference - timedelta(days=(reference.weekday() - week_start) % 7)
    return start, start + timedelta(days=6)


def month_range(reference: date) -> tuple[date, date]:
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def window_bounds(reference: date, granularity: Granularity) -> tuple[date, date]:
    if granularity == Granularity.DAY:
        return reference, reference
    if granularity == Granularity.WEEK:
        return week_range(reference)
    return month_range(reference)


def select_window(
    summaries: Mapping[date, DailySummary],
    reference: date,
    granularity: Granularity,
) -> list[DailySummary]:
    """Summaries inside the window anchored at ``reference``, oldest first.

    Both bounds are inclusive.
    """
    start, end = window_bounds(reference, granularity)
    if granularity == Granularity.DAY:
        summary = summaries.get(reference)
        return [summary] if summary is not None else []

    selected = [summary for work_date, summary in summaries.items() if start <= work_date <= end]
    return sorted(selected, key=lambda summary: summary.work_date)


def _add_months(value: date, months: int) -> date:
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def shift_reference(reference: date, granularity: Granularity, offset: int) -> date:
    """Move the reference date by ``offset`` windows."""
    if granularity == Granularity.DAY:
        return reference + timedelta(days=offset)
    if granularity == Granularity.WEEK:
        return reference + timedelta(days=7 * offset)
    return _add_months(reference, offset)


def can_advance(reference: date, granularity: Granularity, today: date) -> bool:
    """False when the next window would start after ``today``."""
    next_start, _ = window_bounds(shift_reference(reference, granularity, 1), granularity)
    return next_start <= today


def navigate(reference: date, granularity: Granularity, offset: int, today: date) -> date:
    """Move ``offset`` windows; forward moves into the future are a no-op."""
    moved = shift_reference(reference, granularity, offset)
    if offset > 0 and window_bounds(moved, granularity)[0] > today:
        return reference
    return moved


def window_title(reference: date, granularity: Granularity) -> str:
    if granularity == Granularity.DAY:
        return reference.strftime("%A, %d %B %Y")
    if granularity == Granularity.WEEK:
        start, end = week_range(reference)
        return f"{start:%d/%m} - {end:%d/%m}, {end.year}"
    return reference.strftime("%B %Y")
