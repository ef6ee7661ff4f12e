from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..core.constants import NOTICE_HISTORY_SIZE
from ..core.enums import NoticeLevel


@dataclass(frozen=True)
class Notice:
    """Transient user-visible message."""

    message: str
    level: NoticeLevel
    created_at: datetime = field(default_factory=now_utc)

    def to_dict(self) -> dict:
        return {"message": self.message, "level": self.level.value, "created_at": self.created_at.isoformat()}


class NoticeBoard:
    def __init__(self, *, listener: Optional[Callable[[Notice], None]] = None, size: int = NOTICE_HISTORY_SIZE):
        self._recent: deque[Notice] = deque(maxlen=size)
        self._listener = listener

    def post(self, message: str, level: NoticeLevel) -> Notice:
        notice = Notice(message=message, level=level)
        self._recent.append(notice)
        if self._listener is not None:
            self._listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.SUCCESS)

    def error(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.ERROR)

    @property
    def recent(self) -> list[Notice]:
        return list(self._recent)

    @property
    def latest(self) -> Optional[Notice]:
        return self._recent[-1] if self._recent else None
