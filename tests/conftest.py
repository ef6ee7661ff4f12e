from __future__ import annotations

import threading
from datetime import datetime, timezone

import pytest

from punchlog.core.exceptions import TransportError

HEADER = ["employee", "action", "timestamp", "date", "time", "source"]


class FakeLogStore:
    """In-memory log store; gates let tests hold a fetch or append mid-flight."""

    def __init__(self, rows=None):
        self.rows = [list(r) for r in rows or []]
        self.appended = []
        self.fetch_count = 0
        self.fail_fetch = False
        self.append_error = None
        self.fetch_gate = threading.Event()
        self.fetch_gate.set()
        self.append_gate = threading.Event()
        self.append_gate.set()
        self.fetch_started = threading.Event()

    def fetch_rows(self):
        self.fetch_started.set()
        assert self.fetch_gate.wait(5)
        self.fetch_count += 1
        if self.fail_fetch:
            raise TransportError("HTTP error! status: 503")
        return [list(r) for r in self.rows]

    def append_row(self, row):
        assert self.append_gate.wait(5)
        if self.append_error is not None:
            raise self.append_error
        self.appended.append(list(row))
        self.rows.append(list(row))


def make_row(actor, action, timestamp="", source="test"):
    """Build a log row; date/time columns are derived from the timestamp."""
    work_date = timestamp[:10] if timestamp else ""
    time_text = timestamp[11:19] if len(timestamp) >= 19 else ""
    return [actor, action, timestamp, work_date, time_text, source]


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 3, 4, 8, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def row():
    return make_row


@pytest.fixture
def make_store():
    return FakeLogStore
