from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..events.model import DailyLog
from ..shifts.model import ShiftPair


@dataclass(frozen=True)
class DailySummary:
    """Per-employee, per-date read model used by reports and exports."""

    work_date: date
    first_in: Optional[datetime]
    last_out: Optional[datetime]
    total_hours: float
    shift_pairs: tuple[ShiftPair, ...]
    logs: tuple[DailyLog, ...]
