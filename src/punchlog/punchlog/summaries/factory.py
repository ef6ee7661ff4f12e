from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CalculationMethod
from .policies.base import HoursPolicy
from .policies.first_last import FirstLastPolicy
from .policies.pairs import PairsPolicy


@dataclass
class HoursPolicyFactory:
    """Factory Pattern: pick the hours policy for a calculation method."""

    def for_method(self, method: CalculationMethod) -> HoursPolicy:
        if method == CalculationMethod.PAIRS:
            return PairsPolicy()
        return FirstLastPolicy()
