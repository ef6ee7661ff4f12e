from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import requests

from punchlog.core.enums import EventAction
from punchlog.core.exceptions import LogicalError, TransportError
from punchlog.remote.http_store import HttpLogStore
from punchlog.remote.rows import build_event_row


def response(status: int, body) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.reason = "OK" if status < 400 else "Error"
    r._content = body.encode("utf-8") if isinstance(body, str) else json.dumps(body).encode("utf-8")
    return r


@pytest.fixture
def session():
    return requests.Session()


@pytest.fixture
def store(session):
    return HttpLogStore(read_url="http://store/values", write_url="http://store/append", timeout=3, session=session)


def test_fetch_drops_header_row(store, session):
    body = {"values": [["employee", "action"], ["Dana", "employee_added"], ["Avi", "checkin"]]}
    with patch.object(session, "get", return_value=response(200, body)) as get:
        rows = store.fetch_rows()

    assert rows == [["Dana", "employee_added"], ["Avi", "checkin"]]
    get.assert_called_once_with("http://store/values", timeout=3)


def test_fetch_accepts_bare_array_and_empty_sheet(store, session):
    with patch.object(session, "get", return_value=response(200, [["header"], ["Dana", "employee_added"]])):
        assert store.fetch_rows() == [["Dana", "employee_added"]]
    with patch.object(session, "get", return_value=response(200, {})):
        assert store.fetch_rows() == []


def test_fetch_non_200_is_transport_error(store, session):
    with patch.object(session, "get", return_value=response(503, "unavailable")):
        with pytest.raises(TransportError, match="503"):
            store.fetch_rows()


def test_fetch_connection_error_is_transport_error(store, session):
    with patch.object(session, "get", side_effect=requests.ConnectionError("boom")):
        with pytest.raises(TransportError):
            store.fetch_rows()


def test_append_posts_values_body(store, session):
    row = ["Dana", "checkin", "2026-03-02T09:00:00.000Z", "2026-03-02", "09:00:00", "test"]
    with patch.object(session, "post", return_value=response(200, {"ok": True})) as post:
        store.append_row(row)

    post.assert_called_once_with("http://store/append", json={"values": [row]}, timeout=3)


@pytest.mark.parametrize("body", [{"ok": False, "error": "sheet locked"}, {"result": "?"}, "<html>oops</html>", [1, 2]])
def test_append_logical_failures(store, session, body):
    with patch.object(session, "post", return_value=response(200, body)):
        with pytest.raises(LogicalError):
            store.append_row(["Dana", "checkin"])


def test_append_logical_error_carries_remote_message(store, session):
    with patch.object(session, "post", return_value=response(200, {"ok": False, "error": "sheet locked"})):
        with pytest.raises(LogicalError, match="sheet locked"):
            store.append_row(["Dana", "checkin"])


def test_append_http_error_is_transport_error(store, session):
    with patch.object(session, "post", return_value=response(500, {"ok": False})):
        with pytest.raises(TransportError):
            store.append_row(["Dana", "checkin"])


def test_build_event_row_uses_utc_columns():
    at = datetime(2026, 3, 2, 23, 30, 5, 123456, tzinfo=timezone.utc)
    assert build_event_row(EventAction.CHECK_OUT, "Dana", at, "kiosk") == [
        "Dana",
        "checkout",
        "2026-03-02T23:30:05.123Z",
        "2026-03-02",
        "23:30:05",
        "kiosk",
    ]
