from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo

from .access.service import AuthService
from .attendance.service import AttendanceService
from .core.enums import CalculationMethod
from .local.json_store import JsonFileStore, MemoryStore
from .local.preferences import SessionRepository, WageRepository
from .local.repository import KeyValueStore
from .remote.http_store import HttpLogStore
from .remote.repository import LogStore
from .reports.service import ReportService
from .sync.coordinator import SyncCoordinator
from .sync.worker import BackgroundRefresher


@dataclass(frozen=True)
class Container:
    store: LogStore
    local_state: KeyValueStore

    sessions_repo: SessionRepository
    wages_repo: WageRepository

    coordinator: SyncCoordinator
    refresher: BackgroundRefresher

    auth_service: AuthService
    attendance_service: AttendanceService
    report_service: ReportService

    tz: tzinfo
    currency: str


def build_container(
    settings: Any,
    *,
    store: Optional[LogStore] = None,
    local_state: Optional[KeyValueStore] = None,
) -> Container:
    if store is None:
        store = HttpLogStore(
            read_url=str(settings.REMOTE_READ_URL),
            write_url=str(settings.REMOTE_WRITE_URL),
            timeout=float(getattr(settings, "REQUEST_TIMEOUT_SECONDS", 30)),
        )
    if local_state is None:
        state_file = getattr(settings, "STATE_FILE", "")
        local_state = JsonFileStore(state_file) if state_file else MemoryStore()

    tz = ZoneInfo(str(getattr(settings, "DISPLAY_TIMEZONE", "UTC")))

    sessions_repo = SessionRepository(local_state)
    wages_repo = WageRepository(local_state)

    coordinator = SyncCoordinator(
        store,
        method=CalculationMethod(getattr(settings, "CALCULATION_METHOD", CalculationMethod.FIRST_LAST.value)),
        source=str(getattr(settings, "EVENT_SOURCE", "punchlog")),
    )
    refresher = BackgroundRefresher(coordinator, interval_seconds=float(getattr(settings, "SYNC_INTERVAL_SECONDS", 120)))

    auth_service = AuthService(sessions_repo, passphrase=lambda: coordinator.passphrase, roster=lambda: coordinator.roster)
    attendance_service = AttendanceService(coordinator, wages_repo, tz=tz)
    report_service = ReportService(coordinator.summaries_for, lambda: coordinator.method, wages_repo.load)

    return Container(
        store=store,
        local_state=local_state,
        sessions_repo=sessions_repo,
        wages_repo=wages_repo,
        coordinator=coordinator,
        refresher=refresher,
        auth_service=auth_service,
        attendance_service=attendance_service,
        report_service=report_service,
        tz=tz,
        currency=str(getattr(settings, "CURRENCY", "ILS")),
    )
