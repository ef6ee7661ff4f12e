from __future__ import annotations

from enum import Enum


class EventAction(str, Enum):
    """Action column values found in the attendance log."""

    CHECK_IN = "checkin"
    CHECK_OUT = "checkout"
    EMPLOYEE_ADDED = "employee_added"
    EMPLOYEE_REMOVED = "employee_removed"
    ADMIN_PASSWORD_CHANGED = "admin_password_change"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "EventAction":
        try:
            action = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return action

    @property
    def is_attendance(self) -> bool:
        return self in (EventAction.CHECK_IN, EventAction.CHECK_OUT)


class SyncStatus(str, Enum):
    """Connection state shown next to the cached data."""

    CONNECTING = "connecting"
    CONNECTED = "connected"
    SYNCING = "syncing"
    ERROR = "error"
    OFFLINE = "offline"


class CalculationMethod(str, Enum):
    """How daily total hours are derived from the logs."""

    FIRST_LAST = "first_last"
    PAIRS = "pairs"


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
