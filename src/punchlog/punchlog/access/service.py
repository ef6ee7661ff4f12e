from __future__ import annotations

import hmac
from typing import Callable, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import ADMIN_DISPLAY_NAME
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..local.preferences import SessionRepository, SessionUser


class AuthService:
    """Use case: identify the person using this device.

    Employees pick their name from the roster; the admin enters the shared
    passphrase folded from the log.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        passphrase: Callable[[], str],
        roster: Callable[[], Sequence[str]],
    ):
        self._sessions = sessions
        self._passphrase = passphrase
        self._roster = roster

    def current_user(self) -> Optional[SessionUser]:
        return self._sessions.load()

    def login_admin(self, passphrase: str) -> SessionUser:
        expected = self._passphrase()
        if not hmac.compare_digest((passphrase or "").encode("utf-8"), expected.encode("utf-8")):
            raise AuthenticationError("Wrong access code")

        user = SessionUser(name=ADMIN_DISPLAY_NAME, is_admin=True)
        self._sessions.save(user)
        return user

    def identify_employee(self, name: str) -> SessionUser:
        name = require_non_empty(name, "Employee name")
        if name not in self._roster():
            raise ValidationError("Employee does not exist")

        user = SessionUser(name=name, is_admin=False)
        self._sessions.save(user)
        return user

    def logout(self) -> None:
        self._sessions.clear()

    def validate_session(self, roster: Optional[Sequence[str]] = None) -> bool:
        """Drop an employee session whose name left a non-empty roster."""
        user = self._sessions.load()
        names = self._roster() if roster is None else roster
        if user and not user.is_admin and names and user.name not in names:
            self._sessions.clear()
            return False
        return True

    def require_admin(self) -> SessionUser:
        user = self._sessions.load()
        if not user or not user.is_admin:
            raise AuthorizationError("Admin access required")
        return user

    def require_user(self) -> SessionUser:
        user = self._sessions.load()
        if not user:
            raise AuthorizationError("Identify yourself first")
        return user
