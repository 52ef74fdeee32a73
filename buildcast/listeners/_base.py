"""Shared close-notification plumbing for the bundled listeners."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from buildcast.listeners import ListenerClosedError

logger = logging.getLogger(__name__)


class ClosableListener:
    """Tracks the open/closed flag and fires close callbacks exactly once."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._closed = False
        self._callbacks: list[Callable[[], None]] = []
        self._state_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def on_close(self, callback: Callable[[], None]) -> None:
        with self._state_lock:
            if not self._closed:
                self._callbacks.append(callback)
                return
        # Already closed: notify immediately
        callback()

    def close(self) -> None:
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        self._release()
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:  # noqa: BLE001
                logger.error("Close callback failed for %s: %s", self.name, exc)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ListenerClosedError(f"Listener {self.name} is closed")

    def _release(self) -> None:
        """Release transport resources.  Subclasses override."""
