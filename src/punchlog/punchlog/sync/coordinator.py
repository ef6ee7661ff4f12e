"""Cached projection of the remote log plus the refresh/write protocol.

All remote I/O goes through the coordinator. Local computation (normalizing,
pairing, summarizing) runs synchronously; only the store calls suspend.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import date, datetime
from typing import Callable, Mapping, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import SYSTEM_ACTOR
from ..core.enums import CalculationMethod, EventAction, SyncStatus
from ..core.exceptions import CriticalProcessingError, RemoteStoreError, ValidationError
from ..events.model import LogProjection
from ..events.normalizer import normalize_rows, sort_roster
from ..remote.repository import LogStore
from ..remote.rows import build_event_row
from ..summaries.model import DailySummary
from ..summaries.service import SummaryBuilder, SummaryStore
from .gate import WriteGate
from .notices import NoticeBoard

logger = logging.getLogger(__name__)


class SyncCoordinator:
    def __init__(
        self,
        store: LogStore,
        *,
        method: CalculationMethod = CalculationMethod.FIRST_LAST,
        source: str = "punchlog",
        notices: Optional[NoticeBoard] = None,
        gate: Optional[WriteGate] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._store = store
        self._method = method
        self._source = source
        self.notices = notices or NoticeBoard()
        self._gate = gate or WriteGate()
        self._clock = clock

        self._status = SyncStatus.OFFLINE
        self._projection = LogProjection()
        self._roster: list[str] = []
        self._summaries: SummaryStore = {}
        self._refreshing = False
        # guards the cached projection; request threads and the refresher thread share it
        self._lock = threading.RLock()

    # --- read side ---------------------------------------------------------

    @property
    def status(self) -> SyncStatus:
        return self._status

    @property
    def roster(self) -> list[str]:
        with self._lock:
            return list(self._roster)

    @property
    def passphrase(self) -> str:
        return self._projection.passphrase

    @property
    def projection(self) -> LogProjection:
        return self._projection

    @property
    def method(self) -> CalculationMethod:
        return self._method

    @property
    def gate(self) -> WriteGate:
        return self._gate

    def summaries_for(self, employee: str) -> Mapping[date, DailySummary]:
        return self._summaries.get(employee, {})

    def set_calculation_method(self, method: CalculationMethod) -> None:
        with self._lock:
            self._method = method
            self._rebuild_summaries()

    # --- internals ---------------------------------------------------------

    def _set_status(self, status: SyncStatus) -> None:
        if status != self._status:
            logger.debug("Sync status %s -> %s", self._status.value, status.value)
        self._status = status

    async def _fetch_projection(self) -> LogProjection:
        rows = await asyncio.to_thread(self._store.fetch_rows)
        return normalize_rows(rows)

    def _apply_projection(self, projection: LogProjection) -> None:
        """Replace the cached projection wholesale. Caller holds ``_lock``."""
        self._projection = projection
        self._roster = list(projection.roster)
        self._set_status(SyncStatus.CONNECTED)
        self._rebuild_summaries()

    def _derive_summaries(self) -> SummaryStore:
        try:
            return SummaryBuilder(self._method).build_all(self._projection.logs)
        except Exception as exc:
            raise CriticalProcessingError("failed to derive daily summaries") from exc

    def _rebuild_summaries(self) -> bool:
        """Replace the summary cache; keeps the previous one on failure."""
        try:
            summaries = self._derive_summaries()
        except CriticalProcessingError:
            logger.exception("Error during attendance data processing")
            self.notices.error("Critical error while processing attendance data")
            self._set_status(SyncStatus.ERROR)
            return False
        self._summaries = summaries
        return True

    # --- refresh -----------------------------------------------------------

    async def load(self) -> list[str]:
        """Startup/full reload: Connecting -> Connected | Error."""
        self._set_status(SyncStatus.CONNECTING)
        try:
            projection = await self._fetch_projection()
        except RemoteStoreError:
            logger.exception("Initial load from the log store failed")
            self._fail_load()
            return []
        except Exception:
            logger.exception("Unexpected error during initial load")
            self._fail_load()
            return []

        with self._lock:
            self._apply_projection(projection)
            return list(self._roster)

    def _fail_load(self) -> None:
        self._set_status(SyncStatus.ERROR)
        self.notices.error("Failed to sync attendance data")

    async def background_refresh(self) -> bool:
        """Periodic re-fold of the full remote log.

        Skipped outright (not queued) while an optimistic write is in flight or
        another refresh is running. Returns True when the cache was replaced.
        """
        with self._lock:
            if self._gate.busy:
                logger.info("Background refresh skipped: roster write in flight")
                return False
            if self._refreshing:
                logger.info("Background refresh skipped: refresh already running")
                return False
            self._refreshing = True
            started_generation = self._gate.generation

        self._set_status(SyncStatus.SYNCING)
        try:
            try:
                projection = await self._fetch_projection()
            except RemoteStoreError as exc:
                logger.error("Background refresh failed: %s", exc)
                self._set_status(SyncStatus.ERROR)
                return False
            except Exception:
                logger.exception("Unexpected error during background refresh")
                self._set_status(SyncStatus.ERROR)
                return False

            # the gate check and the swap happen under one lock so a roster
            # write cannot start between them
            with self._lock:
                if self._gate.busy or self._gate.generation != started_generation:
                    logger.info("Background refresh discarded: roster write started during fetch")
                    self._set_status(SyncStatus.CONNECTED)
                    return False
                self._apply_projection(projection)
            return True
        finally:
            with self._lock:
                self._refreshing = False

    # --- writes ------------------------------------------------------------

    async def record(self, action: EventAction, actor: str, *, at: Optional[datetime] = None) -> bool:
        """Append one event: Syncing -> Connected | Error. Never raises on remote failure."""
        row = build_event_row(action, actor, at or self._clock(), self._source)
        self._set_status(SyncStatus.SYNCING)
        try:
            await asyncio.to_thread(self._store.append_row, row)
        except RemoteStoreError as exc:
            logger.error("Recording %s for %s failed: %s", action.value, actor, exc, extra={"error_type": type(exc).__name__})
            self._set_status(SyncStatus.ERROR)
            self.notices.error("Recording failed. Check the network connection.")
            return False
        self._set_status(SyncStatus.CONNECTED)
        return True

    async def _optimistic_roster_write(
        self,
        *,
        mutate: Callable[[list[str]], list[str]],
        action: EventAction,
        name: str,
        failure_message: str,
    ) -> bool:
        # the gate is raised before the optimistic roster becomes visible
        with self._gate.held():
            with self._lock:
                original = list(self._roster)
                self._roster = mutate(original)

            try:
                ok = await self.record(action, name)
            except Exception:
                logger.exception("Critical error during roster update for %s", name)
                self.notices.error("Critical error. The employee list was restored.")
                ok = False
            else:
                if not ok:
                    self.notices.error(failure_message)

            if not ok:
                with self._lock:
                    self._roster = original
        return ok

    async def add_employee(self, name: str) -> bool:
        trimmed = require_non_empty(name, "Employee name")
        if trimmed == SYSTEM_ACTOR:
            raise ValidationError(f"'{SYSTEM_ACTOR}' is a reserved name")
        if trimmed in self.roster:
            raise ValidationError("An employee with this name already exists")

        self.notices.success(f"Employee {trimmed} added. Syncing in the background...")
        return await self._optimistic_roster_write(
            mutate=lambda roster: roster if trimmed in roster else sort_roster([*roster, trimmed]),
            action=EventAction.EMPLOYEE_ADDED,
            name=trimmed,
            failure_message=f"Adding employee {trimmed} failed.",
        )

    async def remove_employee(self, name: str) -> bool:
        if not name or name not in self.roster:
            raise ValidationError("Select an employee to remove")

        self.notices.success(f"Employee {name} removed.")
        return await self._optimistic_roster_write(
            mutate=lambda roster: [employee for employee in roster if employee != name],
            action=EventAction.EMPLOYEE_REMOVED,
            name=name,
            failure_message=f"Sync error. {name} was restored to the list.",
        )
