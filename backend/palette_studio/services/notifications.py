"""
Transient user notifications.

A single slot: posting a new notification replaces the pending one and resets
the dismiss deadline.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from palette_studio.config import config


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    code: Optional[str] = None
    expires_at: float = 0.0


class Notifier:
    """Holds at most one notification until its dismiss deadline passes."""

    def __init__(self, ttl_ms: int = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = (config.NOTIFICATION_TTL_MS if ttl_ms is None else ttl_ms) / 1000.0
        self._clock = clock
        self._pending: Optional[Notification] = None

    def post(self, message: str, level: NotificationLevel = NotificationLevel.INFO,
             code: Optional[str] = None) -> Notification:
        self._pending = Notification(message, level, code, self._clock() + self.ttl)
        return self._pending

    @property
    def current(self) -> Optional[Notification]:
        """The pending notification, or None once dismissed or expired."""
        if self._pending is not None and self._clock() >= self._pending.expires_at:
            self._pending = None
        return self._pending

    def dismiss(self) -> None:
        self._pending = None
