from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Mapping

from ..core.enums import CalculationMethod, Granularity
from ..summaries.model import DailySummary
from .window import select_window, window_bounds, window_title


@dataclass(frozen=True)
class EmployeeReport:
    """One employee's report window plus totals and estimated pay."""

    employee: str
    granularity: Granularity
    reference: date
    start: date
    end: date
    title: str
    method: CalculationMethod
    days: list[DailySummary]
    total_hours: float
    hourly_wage: float
    estimated_pay: float

    @property
    def work_days(self) -> int:
        return len(self.days)


class ReportService:
    """Use case: build a report window for one employee.

    Collaborators are passed as callables so the service always reads the
    coordinator's current cache rather than a snapshot taken at wiring time.
    """

    def __init__(
        self,
        summaries_for: Callable[[str], Mapping[date, DailySummary]],
        method: Callable[[], CalculationMethod],
        wages: Callable[[], Mapping[str, float]],
    ):
        self._summaries_for = summaries_for
        self._method = method
        self._wages = wages

    def build_report(self, *, employee: str, reference: date, granularity: Granularity) -> EmployeeReport:
        days = select_window(self._summaries_for(employee), reference, granularity)
        start, end = window_bounds(reference, granularity)
        total_hours = sum(day.total_hours for day in days)
        wage = float(self._wages().get(employee, 0.0))

        return EmployeeReport(
            employee=employee,
            granularity=granularity,
            reference=reference,
            start=start,
            end=end,
            title=window_title(reference, granularity),
            method=self._method(),
            days=days,
            total_hours=total_hours,
            hourly_wage=wage,
            estimated_pay=total_hours * wage,
        )

    @staticmethod
    def to_dict(report: EmployeeReport) -> dict:
        return {
            "employee": report.employee,
            "granularity": report.granularity.value,
            "reference": report.reference.isoformat(),
            "start": report.start.isoformat(),
            "end": report.end.isoformat(),
            "title": report.title,
            "method": report.method.value,
            "work_days": report.work_days,
            "total_hours": round(report.total_hours, 3),
            "hourly_wage": report.hourly_wage,
            "estimated_pay": round(report.estimated_pay, 2),
            "days": [
                {
                    "date": day.work_date.isoformat(),
                    "first_in": day.first_in.isoformat() if day.first_in else None,
                    "last_out": day.last_out.isoformat() if day.last_out else None,
                    "total_hours": round(day.total_hours, 3),
                    "shift_pairs": [
                        {
                            "checkin": pair.checkin.isoformat(),
                            "checkout": pair.checkout.isoformat(),
                            "duration_hours": round(pair.duration_hours, 3),
                        }
                        for pair in day.shift_pairs
                    ],
                }
                for day in report.days
            ],
        }
