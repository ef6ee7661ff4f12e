from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Local durable storage holding independently keyed JSON text records."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
