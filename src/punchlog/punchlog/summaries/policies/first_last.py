from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import hours_between
from ...shifts.model import PairingResult
from .base import HoursPolicy


class FirstLastPolicy(HoursPolicy):
    """First check-in to last check-out, breaks included, not below 0."""

    def total_hours(self, *, first_in: Optional[datetime], last_out: Optional[datetime], pairing: PairingResult) -> float:
        if first_in is None or last_out is None or last_out <= first_in:
            return 0.0
        return hours_between(first_in, last_out)
