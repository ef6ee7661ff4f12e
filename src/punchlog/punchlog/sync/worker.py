from __future__ import annotations

import asyncio
import logging
import threading
from typing import Optional

from ..core.constants import DEFAULT_SYNC_INTERVAL_SECONDS
from .coordinator import SyncCoordinator

logger = logging.getLogger(__name__)


async def refresh_loop(coordinator: SyncCoordinator, *, interval_seconds: float, stop_event: asyncio.Event) -> None:
    """Run a background refresh every ``interval_seconds`` until stopped.

    A cycle that is skipped or fails is not retried early; the next attempt
    waits for the following tick.
    """
    while not stop_event.is_set():
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
        except asyncio.TimeoutError:
            pass
        else:
            break

        try:
            await coordinator.background_refresh()
        except Exception:
            logger.exception("background_refresh_tick_failed")


class BackgroundRefresher:
    """Initial load followed by the periodic refresh loop on a daemon thread."""

    def __init__(self, coordinator: SyncCoordinator, *, interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS):
        self._coordinator = coordinator
        self._interval = max(1.0, float(interval_seconds))
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._ready = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    async def _main(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        self._ready.set()
        await self._coordinator.load()
        logger.info("background_refresh_started", extra={"interval_seconds": self._interval})
        await refresh_loop(self._coordinator, interval_seconds=self._interval, stop_event=self._stop_event)

    def start(self) -> None:
        if self.running:
            return
        self._ready.clear()
        self._thread = threading.Thread(target=asyncio.run, args=(self._main(),), name="punchlog-refresh", daemon=True)
        self._thread.start()
        self._ready.wait()

    def stop(self, timeout: Optional[float] = None) -> None:
        if not self.running or self._loop is None or self._stop_event is None:
            return
        self._loop.call_soon_threadsafe(self._stop_event.set)
        self._thread.join(timeout)
        logger.info("background_refresh_stopped")
