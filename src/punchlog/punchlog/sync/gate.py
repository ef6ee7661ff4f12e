from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class WriteGate:
    """Tracks optimistic roster writes that the remote store has not absorbed.

    Background refresh checks ``busy`` and skips its cycle while any write is
    held. ``generation`` counts writes ever started, so a refresh can tell a
    write began while its fetch was in flight and discard the stale result.
    Request threads and the refresher thread share one gate.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_flight = 0
        self._generation = 0

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @contextmanager
    def held(self) -> Iterator[None]:
        with self._lock:
            self._in_flight += 1
            self._generation += 1
        try:
            yield
        finally:
            with self._lock:
                self._in_flight -= 1
