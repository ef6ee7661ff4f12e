from __future__ import annotations

import json

from punchlog.local.json_store import JsonFileStore, MemoryStore
from punchlog.local.preferences import SESSION_KEY, WAGES_KEY, SessionRepository, SessionUser, WageRepository


def test_session_round_trip_through_file(tmp_path):
    store = JsonFileStore(tmp_path / "state" / "punchlog.json")
    repo = SessionRepository(store)

    repo.save(SessionUser(name="Dana"))

    assert SessionRepository(JsonFileStore(tmp_path / "state" / "punchlog.json")).load() == SessionUser(name="Dana", is_admin=False)
    repo.clear()
    assert repo.load() is None


def test_corrupt_session_is_cleared():
    store = MemoryStore({SESSION_KEY: "{not json"})
    assert SessionRepository(store).load() is None
    assert SESSION_KEY not in store.data

    store = MemoryStore({SESSION_KEY: json.dumps({"isAdmin": True})})
    assert SessionRepository(store).load() is None
    assert SESSION_KEY not in store.data


def test_wages_drop_invalid_entries_individually():
    store = MemoryStore({WAGES_KEY: json.dumps({"Dana": 45.5, "Avi": "40", "Bad": "abc", "Null": None, "Flag": True})})

    assert WageRepository(store).load() == {"Dana": 45.5, "Avi": 40.0}


def test_stored_negative_wage_is_dropped():
    store = MemoryStore({WAGES_KEY: json.dumps({"Dana": -12, "Avi": 30, "Ben": "-0.5"})})

    assert WageRepository(store).load() == {"Avi": 30.0}


def test_wages_non_object_or_corrupt_is_empty():
    assert WageRepository(MemoryStore({WAGES_KEY: "[1, 2]"})).load() == {}
    assert WageRepository(MemoryStore({WAGES_KEY: "{{"})).load() == {}
    assert WageRepository(MemoryStore()).load() == {}


def test_save_wages_drops_negative_and_non_numbers():
    store = MemoryStore()
    saved = WageRepository(store).save({"Dana": "50", "Avi": -3, "Ben": "x"})

    assert saved == {"Dana": 50.0}
    assert json.loads(store.data[WAGES_KEY]) == {"Dana": 50.0}


def test_unreadable_state_file_behaves_empty(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("garbage", encoding="utf-8")
    store = JsonFileStore(path)

    assert store.get(SESSION_KEY) is None
    store.set("k", "v")
    assert JsonFileStore(path).get("k") == "v"
