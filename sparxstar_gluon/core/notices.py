"""Admin-visible notices.

Startup problems that disable a feature are reported once as an admin notice
instead of crashing the host process.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import List, Optional

from pydantic import Field

from sparxstar_gluon.schemas.base import BaseSchema

from .logging_config import get_logger

logger = get_logger(__name__)

PLUGIN_TAG = "SPARXSTAR-Gluon"


class NoticeLevel(str, Enum):
    error = "error"
    warning = "warning"
    info = "info"
    success = "success"


class AdminNotice(BaseSchema):
    level: NoticeLevel
    message: str
    link: Optional[str] = Field(default=None, description="Documentation or download link for the notice.")


class AdminNotices:
    """Collects admin notices, deduplicated by (level, message)."""

    def __init__(self, plugin_name: str = PLUGIN_TAG) -> None:
        self._plugin_name = plugin_name
        self._lock = threading.Lock()
        self._notices: List[AdminNotice] = []

    def add(self, message: str, level: NoticeLevel = NoticeLevel.error, link: Optional[str] = None) -> AdminNotice:
        notice = AdminNotice(level=level, message=f"[{self._plugin_name}] {message.strip()}", link=link)
        with self._lock:
            for existing in self._notices:
                if existing.level == notice.level and existing.message == notice.message:
                    return existing
            self._notices.append(notice)
        log = logger.error if level == NoticeLevel.error else logger.info
        log(f"Admin notice ({level.value}): {notice.message}")
        return notice

    def all(self) -> List[AdminNotice]:
        with self._lock:
            return list(self._notices)

    def has_errors(self) -> bool:
        return any(n.level == NoticeLevel.error for n in self.all())

    def clear(self) -> None:
        with self._lock:
            self._notices.clear()
