from __future__ import annotations

import csv
import io
from datetime import datetime, tzinfo
from typing import Optional

from ..core.enums import CalculationMethod
from ..core.exceptions import ValidationError
from .service import EmployeeReport

BOM = "\ufeff"

METHOD_LABELS = {
    CalculationMethod.FIRST_LAST: "First in - last out",
    CalculationMethod.PAIRS: "Shift pairs",
}


def format_time(value: Optional[datetime], tz: tzinfo) -> str:
    if value is None:
        return "-"
    return value.astimezone(tz).strftime("%H:%M")


def format_currency(amount: float, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


def _header_rows(report: EmployeeReport, currency: str) -> list[list[str]]:
    wage = format_currency(report.hourly_wage, currency) if report.hourly_wage > 0 else "Not set"
    return [
        ["Attendance report"],
        [""],
        ["Employee:", report.employee],
        ["Report period:", report.title],
        ["Calculation method:", METHOD_LABELS[report.method]],
        [""],
        ["Total work days:", str(report.work_days)],
        ["Total work hours:", f"{report.total_hours:.3f}"],
        ["Hourly wage:", wage],
        ["Estimated pay for period:", format_currency(report.estimated_pay, currency)],
        [""],
        ["--- Daily breakdown ---"],
        [""],
    ]


def _detail_rows(report: EmployeeReport, tz: tzinfo) -> list[list[str]]:
    rows: list[list[str]] = []
    for day in report.days:
        day_label = day.work_date.strftime("%d/%m/%Y")
        if report.method == CalculationMethod.FIRST_LAST:
            rows.append([day_label, format_time(day.first_in, tz), format_time(day.last_out, tz), f"{day.total_hours:.3f}"])
            continue

        rows.append([day_label, "", "Day total:", f"{day.total_hours:.3f}"])
        for pair in day.shift_pairs:
            rows.append(["", format_time(pair.checkin, tz), format_time(pair.checkout, tz), f"{pair.duration_hours:.3f}"])
    return rows


def render_report_csv(report: EmployeeReport, *, tz: tzinfo, currency: str = "ILS") -> str:
    """Render one report window as CSV text prefixed with a byte-order mark."""
    if not report.employee or not report.days:
        raise ValidationError("No data to export")

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerows(_header_rows(report, currency))
    writer.writerow(["Date", "In", "Out", "Hours"])
    writer.writerows(_detail_rows(report, tz))
    return BOM + out.getvalue()


def report_filename(report: EmployeeReport) -> str:
    return f"attendance_report_{report.employee}_{report.granularity.value}_{report.reference.isoformat()}.csv"
