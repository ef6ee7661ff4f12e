from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .repository import KeyValueStore

logger = logging.getLogger(__name__)

SESSION_KEY = "currentUser"
WAGES_KEY = "employeeWages"


@dataclass(frozen=True)
class SessionUser:
    """Identity remembered on this device between runs."""

    name: str
    is_admin: bool = False

    def to_dict(self) -> dict:
        return {"name": self.name, "isAdmin": self.is_admin}


class SessionRepository:
    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> Optional[SessionUser]:
        raw = self._store.get(SESSION_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            name = data["name"]
            is_admin = data.get("isAdmin", False)
            if not isinstance(name, str) or not name or not isinstance(is_admin, bool):
                raise ValueError("unexpected session shape")
        except (ValueError, KeyError, TypeError, AttributeError):
            logger.warning("Stored session is corrupt; clearing it")
            self._store.delete(SESSION_KEY)
            return None
        return SessionUser(name=name, is_admin=is_admin)

    def save(self, user: SessionUser) -> None:
        self._store.set(SESSION_KEY, json.dumps(user.to_dict(), ensure_ascii=False))

    def clear(self) -> None:
        self._store.delete(SESSION_KEY)


def _as_wage(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class WageRepository:
    """Hourly wage per employee.

    Corrupt entries are dropped one by one; a corrupt map yields no wages.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> dict[str, float]:
        raw = self._store.get(WAGES_KEY)
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.error("Failed to parse stored employee wages")
            return {}
        if not isinstance(data, dict):
            return {}

        wages: dict[str, float] = {}
        for employee, value in data.items():
            wage = _as_wage(value)
            if wage is None or wage < 0:
                logger.warning("Dropping invalid wage for %s: %r", employee, value)
                continue
            wages[employee] = wage
        return wages

    def save(self, wages: Mapping[str, Any]) -> dict[str, float]:
        cleaned = {}
        for employee, value in wages.items():
            wage = _as_wage(value)
            if wage is not None and wage >= 0:
                cleaned[employee] = wage
        self._store.set(WAGES_KEY, json.dumps(cleaned, ensure_ascii=False))
        return cleaned
