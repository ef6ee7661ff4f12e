from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping, Optional

from ..core.constants import DEFAULT_ADMIN_PASSPHRASE
from ..core.enums import EventAction


@dataclass(frozen=True)
class Event:
    """One parsed row of the append-only attendance log.

    ``actor`` holds the employee name, or the new passphrase for
    ``ADMIN_PASSWORD_CHANGED``. ``timestamp`` and ``work_date`` are only
    guaranteed for check-in/check-out events.
    """

    action: EventAction
    actor: Optional[str]
    timestamp: Optional[datetime] = None
    work_date: Optional[date] = None
    time_text: Optional[str] = None
    source: Optional[str] = None
    raw_action: Optional[str] = None


@dataclass(frozen=True)
class DailyLog:
    action: EventAction
    timestamp: datetime


@dataclass(frozen=True)
class RosterState:
    """Roster and passphrase folded from the event stream."""

    seen: frozenset[str] = frozenset()
    removed: frozenset[str] = frozenset()
    passphrase: str = DEFAULT_ADMIN_PASSPHRASE


# employee -> work date -> logs sorted by timestamp
LogsByEmployee = Mapping[str, Mapping[date, tuple[DailyLog, ...]]]


@dataclass(frozen=True)
class LogProjection:
    """Read-only cached view of the remote log, rebuilt wholesale on refresh."""

    logs: LogsByEmployee = field(default_factory=dict)
    roster: tuple[str, ...] = ()
    passphrase: str = DEFAULT_ADMIN_PASSPHRASE
