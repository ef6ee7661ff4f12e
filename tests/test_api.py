from __future__ import annotations

import asyncio

import pytest

from punchlog.config import testing as test_settings
from punchlog.container import build_container
from punchlog.core.exceptions import TransportError
from punchlog.local.json_store import MemoryStore
from punchlog.main import create_app


@pytest.fixture
def store(make_store, row):
    return make_store(
        [
            ["Avi", "employee_added"],
            ["Dana", "employee_added"],
            row("Dana", "checkin", "2026-03-02T08:00:00.000Z"),
            row("Dana", "checkout", "2026-03-02T16:30:00.000Z"),
        ]
    )


@pytest.fixture
def container(store):
    container = build_container(test_settings, store=store, local_state=MemoryStore())
    asyncio.run(container.coordinator.load())
    return container


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def login_admin(client):
    response = client.post("/api/session/admin", json={"passphrase": "1234"})
    assert response.status_code == 200


def test_status_reports_roster_and_connection(client):
    body = client.get("/api/status").get_json()

    assert body["status"] == "connected"
    assert body["roster"] == ["Avi", "Dana"]
    assert body["current_user"] is None


def test_admin_login_rejects_wrong_code(client):
    response = client.post("/api/session/admin", json={"passphrase": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {"ok": False, "message": "Wrong access code"}


def test_add_employee_requires_admin(client):
    response = client.post("/api/employees", json={"name": "Ben"})

    assert response.status_code == 403


def test_admin_adds_and_removes_employee(client, store):
    login_admin(client)

    added = client.post("/api/employees", json={"name": "Ben"})
    assert added.status_code == 200
    assert added.get_json()["employees"] == ["Avi", "Ben", "Dana"]

    removed = client.delete("/api/employees/Avi")
    assert removed.get_json()["employees"] == ["Ben", "Dana"]
    assert [r[:2] for r in store.appended] == [["Ben", "employee_added"], ["Avi", "employee_removed"]]


def test_failed_add_rolls_back_and_returns_502(client, store):
    login_admin(client)
    store.append_error = TransportError("offline")

    response = client.post("/api/employees", json={"name": "Ben"})

    assert response.status_code == 502
    body = response.get_json()
    assert body["ok"] is False
    assert body["employees"] == ["Avi", "Dana"]
    assert body["message"] == "Adding employee Ben failed."


def test_employee_checks_in_for_self_only(client, store):
    client.post("/api/session/employee", json={"name": "Avi"})

    assert client.post("/api/attendance/checkin", json={}).status_code == 200
    assert store.appended[-1][:2] == ["Avi", "checkin"]

    response = client.post("/api/attendance/checkout", json={"employee": "Dana"})
    assert response.status_code == 403


def test_removed_employee_session_is_dropped(client, container):
    client.post("/api/session/employee", json={"name": "Avi"})
    asyncio.run(container.coordinator.remove_employee("Avi"))

    body = client.get("/api/status").get_json()

    assert body["current_user"] is None
    assert body["notices"][-1]["message"] == 'Employee "Avi" was removed from the system.'


def test_report_json(client):
    client.post("/api/session/employee", json={"name": "Dana"})

    response = client.get("/api/reports/Dana?granularity=week&date=2026-03-04")

    body = response.get_json()
    assert response.status_code == 200
    assert body["total_hours"] == 8.5
    assert [day["date"] for day in body["days"]] == ["2026-03-02"]


def test_report_of_other_employee_forbidden(client):
    client.post("/api/session/employee", json={"name": "Avi"})

    assert client.get("/api/reports/Dana").status_code == 403


def test_report_rejects_bad_granularity(client):
    login_admin(client)

    assert client.get("/api/reports/Dana?granularity=year").status_code == 400


def test_csv_export(client):
    login_admin(client)

    response = client.get("/api/reports/Dana/export.csv?granularity=month&date=2026-03-10")

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.data.decode("utf-8").startswith("\ufeff")
    assert "attachment" in response.headers["Content-Disposition"]


def test_csv_export_empty_window(client):
    login_admin(client)

    assert client.get("/api/reports/Avi/export.csv?granularity=day&date=2026-03-10").status_code == 400


def test_switch_calculation_method(client, container):
    login_admin(client)

    response = client.put("/api/settings/calculation-method", json={"method": "pairs"})

    assert response.get_json()["method"] == "pairs"
    assert container.coordinator.method.value == "pairs"
    assert client.put("/api/settings/calculation-method", json={"method": "avg"}).status_code == 400


def test_wages_admin_only(client):
    client.post("/api/session/employee", json={"name": "Avi"})
    assert client.get("/api/wages").status_code == 403

    login_admin(client)
    saved = client.put("/api/wages", json={"wages": {"Avi": "50"}}).get_json()
    assert saved["wages"] == {"Avi": 50.0}
