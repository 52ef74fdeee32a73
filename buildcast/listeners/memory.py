"""In-memory listener — records every message it receives.

Useful for tests and for embedding buildcast where the consumer lives in
the same process.
"""

from __future__ import annotations

import threading
from typing import Any

from buildcast.core.wire import decode
from buildcast.listeners._base import ClosableListener


class MemoryListener(ClosableListener):
    """Thread-safe listener that keeps sent messages in a list.

    Parameters
    ----------
    name:
        Identifier used in logs.
    """

    def __init__(self, name: str = "memory") -> None:
        super().__init__(name)
        self._messages: list[str] = []
        self._lock = threading.Lock()

    def send(self, data: str) -> None:
        self._ensure_open()
        with self._lock:
            self._messages.append(data)

    @property
    def messages(self) -> list[str]:
        """A copy of the raw messages received so far."""
        with self._lock:
            return list(self._messages)

    def decoded(self) -> list[Any]:
        """The received messages, JSON-decoded."""
        return [decode(m) for m in self.messages]

    def disconnect(self) -> None:
        """Simulate the remote side hanging up."""
        self.close()
