from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ShiftPair:
    """One matched check-in/check-out interval with positive duration."""

    checkin: datetime
    checkout: datetime
    duration_hours: float


@dataclass(frozen=True)
class PairingResult:
    total_hours: float = 0.0
    pairs: tuple[ShiftPair, ...] = field(default_factory=tuple)
