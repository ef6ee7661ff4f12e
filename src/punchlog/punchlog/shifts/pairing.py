from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import hours_between
from ..core.enums import EventAction
from ..events.model import DailyLog
from .model import PairingResult, ShiftPair


def pair_shifts(logs: Iterable[DailyLog]) -> PairingResult:
    """Match check-ins with the following check-out in one left-to-right pass.

    Expects logs sorted by timestamp. A second check-in while one is pending is
    ignored; a check-out with nothing pending is a no-op; intervals that are
    not strictly positive are dropped but still close the pending check-in.
    """
    pending: Optional[datetime] = None
    pairs: list[ShiftPair] = []
    total = 0.0

    for log in logs:
        if log.action == EventAction.CHECK_IN:
            if pending is None:
                pending = log.timestamp
        elif log.action == EventAction.CHECK_OUT and pending is not None:
            if log.timestamp > pending:
                duration = hours_between(pending, log.timestamp)
                pairs.append(ShiftPair(checkin=pending, checkout=log.timestamp, duration_hours=duration))
                total += duration
            pending = None

    return PairingResult(total_hours=total, pairs=tuple(pairs))
