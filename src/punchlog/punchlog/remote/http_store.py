from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ..core.exceptions import LogicalError, TransportError

logger = logging.getLogger(__name__)


class HttpLogStore:
    """Spreadsheet-backed log store reached over HTTP.

    Reads return a 2-D array of cells (row 0 is the header). Appends are posted
    to a script endpoint which answers ``{"ok": true}`` or
    ``{"ok": false, "error": ...}``.
    """

    def __init__(
        self,
        *,
        read_url: str,
        write_url: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._read_url = read_url
        self._write_url = write_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": "punchlog/0.3"})

    def fetch_rows(self) -> list[Sequence[Any]]:
        try:
            response = self._session.get(self._read_url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(f"fetch failed: {exc}") from exc

        if not response.ok:
            raise TransportError(f"HTTP error! status: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("fetch returned a body that is not JSON") from exc

        rows = payload.get("values", []) if isinstance(payload, dict) else payload
        if not isinstance(rows, list):
            raise TransportError("fetch returned an unexpected payload shape")
        logger.debug("Fetched %d log rows", max(len(rows) - 1, 0))
        return rows[1:]

    def append_row(self, row: Sequence[str]) -> None:
        try:
            response = self._session.post(self._write_url, json={"values": [list(row)]}, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(f"append failed: {exc}") from exc

        if not response.ok:
            raise TransportError(f"log store returned a network error: {response.status_code} {response.reason}")

        try:
            result = response.json()
        except ValueError as exc:
            raise LogicalError("log store returned a body that is not JSON") from exc

        if not isinstance(result, dict) or result.get("ok") is not True:
            error = result.get("error") if isinstance(result, dict) else None
            raise LogicalError(str(error or "Unknown error"))
