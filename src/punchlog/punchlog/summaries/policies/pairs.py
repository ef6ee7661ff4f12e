from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...shifts.model import PairingResult
from .base import HoursPolicy


class PairsPolicy(HoursPolicy):
    """Sum of matched shift durations; unmatched events add nothing."""

    def total_hours(self, *, first_in: Optional[datetime], last_out: Optional[datetime], pairing: PairingResult) -> float:
        return pairing.total_hours
