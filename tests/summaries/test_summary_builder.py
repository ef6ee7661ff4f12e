from __future__ import annotations

from datetime import date, datetime, timezone

from punchlog.core.enums import CalculationMethod, EventAction
from punchlog.events.model import DailyLog
from punchlog.summaries.factory import HoursPolicyFactory
from punchlog.summaries.policies.first_last import FirstLastPolicy
from punchlog.summaries.policies.pairs import PairsPolicy
from punchlog.summaries.service import SummaryBuilder

DAY = date(2026, 3, 2)
IN = EventAction.CHECK_IN
OUT = EventAction.CHECK_OUT


def log(action, hour, minute=0):
    return DailyLog(action=action, timestamp=datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc))


SPLIT_DAY = [log(IN, 8), log(OUT, 12), log(IN, 13), log(OUT, 17)]


def test_factory_picks_policy():
    factory = HoursPolicyFactory()
    assert isinstance(factory.for_method(CalculationMethod.FIRST_LAST), FirstLastPolicy)
    assert isinstance(factory.for_method(CalculationMethod.PAIRS), PairsPolicy)


def test_first_last_ignores_breaks():
    summary = SummaryBuilder(CalculationMethod.FIRST_LAST).build_day(DAY, SPLIT_DAY)

    assert summary.first_in == log(IN, 8).timestamp
    assert summary.last_out == log(OUT, 17).timestamp
    assert summary.total_hours == 9.0
    assert len(summary.shift_pairs) == 2


def test_pairs_excludes_breaks():
    summary = SummaryBuilder(CalculationMethod.PAIRS).build_day(DAY, SPLIT_DAY)
    assert summary.total_hours == 8.0


def test_policies_agree_on_single_shift_day():
    day = [log(IN, 9), log(OUT, 17, 30)]
    first_last = SummaryBuilder(CalculationMethod.FIRST_LAST).build_day(DAY, day)
    pairs = SummaryBuilder(CalculationMethod.PAIRS).build_day(DAY, day)
    assert first_last.total_hours == pairs.total_hours == 8.5


def test_first_last_zero_when_endpoint_missing_or_inverted():
    builder = SummaryBuilder(CalculationMethod.FIRST_LAST)

    only_in = builder.build_day(DAY, [log(IN, 9)])
    assert only_in.first_in is not None and only_in.last_out is None
    assert only_in.total_hours == 0.0

    inverted = builder.build_day(DAY, [log(OUT, 8), log(IN, 9)])
    assert inverted.total_hours == 0.0
    assert inverted.shift_pairs == ()


def test_build_all_keeps_logs_and_rebuilds_per_method():
    logs = {"Dana": {DAY: tuple(SPLIT_DAY)}}

    first_last = SummaryBuilder(CalculationMethod.FIRST_LAST).build_all(logs)
    pairs = SummaryBuilder(CalculationMethod.PAIRS).build_all(logs)

    assert first_last["Dana"][DAY].logs == tuple(SPLIT_DAY)
    assert first_last["Dana"][DAY].total_hours == 9.0
    assert pairs["Dana"][DAY].total_hours == 8.0
