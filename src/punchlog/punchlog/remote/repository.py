from __future__ import annotations

from typing import Any, Protocol, Sequence


class LogStore(Protocol):
    """Interface to the remote append-only attendance log.

    Note (DIP): the sync coordinator depends on this interface, not on the
    HTTP client, so tests can plug in an in-memory store.
    """

    def fetch_rows(self) -> list[Sequence[Any]]:
        """All log rows in append order, header row excluded."""
        raise NotImplementedError

    def append_row(self, row: Sequence[str]) -> None:
        """Append one row; raises RemoteStoreError on failure."""
        raise NotImplementedError
