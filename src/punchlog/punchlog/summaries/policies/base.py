from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...shifts.model import PairingResult


class HoursPolicy(ABC):
    """Strategy Pattern: how a day's total hours are computed."""

    @abstractmethod
    def total_hours(
        self,
        *,
        first_in: Optional[datetime],
        last_out: Optional[datetime],
        pairing: PairingResult,
    ) -> float:
        raise NotImplementedError
