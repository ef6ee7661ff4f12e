from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional

from ..core.enums import CalculationMethod, EventAction
from ..events.model import DailyLog, LogsByEmployee
from ..shifts.pairing import pair_shifts
from .factory import HoursPolicyFactory
from .model import DailySummary

# employee -> work date -> summary
SummaryStore = dict[str, dict[date, DailySummary]]


class SummaryBuilder:
    """Combine grouped logs and shift pairing into DailySummary records.

    The calculation method applies to every summary; nothing is cached per
    method, so switching it means building again from the same logs.
    """

    def __init__(self, method: CalculationMethod = CalculationMethod.FIRST_LAST, *, factory: Optional[HoursPolicyFactory] = None):
        self._factory = factory or HoursPolicyFactory()
        self._method = method
        self._policy = self._factory.for_method(method)

    @property
    def method(self) -> CalculationMethod:
        return self._method

    def build_day(self, work_date: date, logs: Iterable[DailyLog]) -> DailySummary:
        day_logs = tuple(logs)
        checkins = [log.timestamp for log in day_logs if log.action == EventAction.CHECK_IN]
        checkouts = [log.timestamp for log in day_logs if log.action == EventAction.CHECK_OUT]
        first_in = checkins[0] if checkins else None
        last_out = checkouts[-1] if checkouts else None

        pairing = pair_shifts(day_logs)
        total = self._policy.total_hours(first_in=first_in, last_out=last_out, pairing=pairing)

        return DailySummary(
            work_date=work_date,
            first_in=first_in,
            last_out=last_out,
            total_hours=total,
            shift_pairs=pairing.pairs,
            logs=day_logs,
        )

    def build_employee(self, dates: Mapping[date, Iterable[DailyLog]]) -> dict[date, DailySummary]:
        return {work_date: self.build_day(work_date, logs) for work_date, logs in dates.items()}

    def build_all(self, logs: LogsByEmployee) -> SummaryStore:
        return {employee: self.build_employee(dates) for employee, dates in logs.items()}
