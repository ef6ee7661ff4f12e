from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Mapping, Optional

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSPHRASE_LENGTH
from ..core.enums import EventAction
from ..core.exceptions import ValidationError
from ..local.preferences import WageRepository
from ..shifts.model import ShiftPair
from ..sync.coordinator import SyncCoordinator


class AttendanceService:
    """Use case: append attendance and admin events, then resync.

    Permission checks live in the controllers; this layer validates input and
    talks to the coordinator.
    """

    def __init__(self, coordinator: SyncCoordinator, wages: WageRepository, *, tz: tzinfo = timezone.utc):
        self._coordinator = coordinator
        self._wages = wages
        self._tz = tz

    def _require_employee(self, name: str) -> str:
        name = require_non_empty(name, "Employee name")
        if name not in self._coordinator.roster:
            raise ValidationError("Employee does not exist")
        return name

    async def _record_then_refresh(self, action: EventAction, actor: str, *, at: Optional[datetime] = None) -> bool:
        ok = await self._coordinator.record(action, actor, at=at)
        if ok:
            await self._coordinator.background_refresh()
        return ok

    async def check_in(self, name: str, *, now: Optional[datetime] = None) -> bool:
        name = self._require_employee(name)
        ok = await self._record_then_refresh(EventAction.CHECK_IN, name, at=now)
        if ok:
            self._coordinator.notices.success(f"{name} checked in")
        return ok

    async def check_out(self, name: str, *, now: Optional[datetime] = None) -> bool:
        name = self._require_employee(name)
        ok = await self._record_then_refresh(EventAction.CHECK_OUT, name, at=now)
        if ok:
            self._coordinator.notices.success(f"{name} checked out")
        return ok

    async def add_retro_shift(self, name: str, *, work_date: date, checkin_time: time, checkout_time: time) -> bool:
        """Record a past shift as a check-in followed by a check-out."""
        name = self._require_employee(name)
        checkin_at = datetime.combine(work_date, checkin_time, tzinfo=self._tz)
        checkout_at = datetime.combine(work_date, checkout_time, tzinfo=self._tz)
        if checkout_at <= checkin_at:
            raise ValidationError("Check-out time must be after check-in time")

        if not await self._coordinator.record(EventAction.CHECK_IN, name, at=checkin_at):
            return False
        ok = await self._record_then_refresh(EventAction.CHECK_OUT, name, at=checkout_at)
        if ok:
            self._coordinator.notices.success("Retroactive shift added")
        return ok

    def find_shift(self, name: str, checkin_at: datetime) -> ShiftPair:
        for summary in self._coordinator.summaries_for(name).values():
            for pair in summary.shift_pairs:
                if pair.checkin == checkin_at:
                    return pair
        raise ValidationError("Shift not found")

    async def cancel_shift(self, name: str, checkin_at: datetime) -> bool:
        """Void a shift by stamping a check-out at its check-in instant.

        On replay the check-in closes with zero duration, which pairing drops,
        and the original check-out is left with nothing pending.
        """
        name = self._require_employee(name)
        pair = self.find_shift(name, checkin_at)
        ok = await self._record_then_refresh(EventAction.CHECK_OUT, name, at=pair.checkin)
        if ok:
            self._coordinator.notices.success("Shift cancelled")
        return ok

    async def change_admin_passphrase(self, new_passphrase: str) -> bool:
        require_min_length(new_passphrase or "", "Passphrase", MIN_PASSPHRASE_LENGTH)
        ok = await self._record_then_refresh(EventAction.ADMIN_PASSWORD_CHANGED, new_passphrase)
        if ok:
            self._coordinator.notices.success("Admin passphrase changed")
        return ok

    def get_wages(self) -> dict[str, float]:
        return self._wages.load()

    def save_wages(self, wages: Mapping[str, Any]) -> dict[str, float]:
        saved = self._wages.save(wages)
        self._coordinator.notices.success("Employee wages updated")
        return saved
