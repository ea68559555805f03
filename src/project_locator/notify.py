"""Host notifications emitted while scanning.

Presentation is the host's business. The locator only reports transient
status text (with a suggested display time) and fatal errors.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def status(self, message: str, timeout_ms: int) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    def status(self, message: str, timeout_ms: int) -> None:
        logger.debug("%s", message)

    def error(self, message: str) -> None:
        logger.error("%s", message)


class RecordingNotifier:
    """Keeps every message so a host can poll (or a test can assert)."""

    def __init__(self) -> None:
        self.statuses: list[str] = []
        self.errors: list[str] = []
        self._lock = threading.Lock()

    def status(self, message: str, timeout_ms: int) -> None:
        # Status updates arrive from walker threads.
        with self._lock:
            self.statuses.append(message)

    def error(self, message: str) -> None:
        with self._lock:
            self.errors.append(message)
