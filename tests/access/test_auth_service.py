from __future__ import annotations

import pytest

from punchlog.access.service import AuthService
from punchlog.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from punchlog.local.json_store import MemoryStore
from punchlog.local.preferences import SessionRepository, SessionUser


@pytest.fixture
def roster():
    return ["Avi", "Dana"]


@pytest.fixture
def sessions():
    return SessionRepository(MemoryStore())


@pytest.fixture
def auth(sessions, roster):
    return AuthService(sessions, passphrase=lambda: "1234", roster=lambda: roster)


def test_admin_login_with_current_passphrase(auth, sessions):
    user = auth.login_admin("1234")

    assert user.is_admin
    assert sessions.load() == user
    assert auth.require_admin() == user


def test_admin_login_wrong_passphrase(auth, sessions):
    with pytest.raises(AuthenticationError):
        auth.login_admin("0000")
    with pytest.raises(AuthenticationError):
        auth.login_admin(None)
    assert sessions.load() is None


def test_identify_employee_requires_roster_member(auth):
    assert auth.identify_employee(" Dana ") == SessionUser(name="Dana")

    with pytest.raises(ValidationError):
        auth.identify_employee("Nobody")
    with pytest.raises(ValidationError):
        auth.identify_employee("")


def test_employee_is_not_admin(auth):
    auth.identify_employee("Avi")

    assert auth.require_user().name == "Avi"
    with pytest.raises(AuthorizationError):
        auth.require_admin()


def test_require_user_without_session(auth):
    with pytest.raises(AuthorizationError):
        auth.require_user()


def test_logout_clears_session(auth):
    auth.identify_employee("Avi")
    auth.logout()

    assert auth.current_user() is None


def test_validate_session_drops_removed_employee(auth, roster):
    auth.identify_employee("Avi")
    roster.remove("Avi")

    assert auth.validate_session() is False
    assert auth.current_user() is None


def test_validate_session_keeps_session_on_empty_roster(auth):
    auth.identify_employee("Avi")

    assert auth.validate_session(roster=[]) is True
    assert auth.current_user().name == "Avi"


def test_validate_session_ignores_admin(auth):
    auth.login_admin("1234")

    assert auth.validate_session(roster=["Dana"]) is True
