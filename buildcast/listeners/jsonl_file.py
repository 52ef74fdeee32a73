"""JSON-lines file listener — appends each message as one line.

Each message is already serialized JSON, so the file is a valid JSON
Lines stream that tools like ``jq`` can follow.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from buildcast.listeners._base import ClosableListener

logger = logging.getLogger(__name__)


class JsonlFileListener(ClosableListener):
    """Appends messages to a JSON-lines file.

    Parameters
    ----------
    path:
        Target file.  Parent directories are created on demand.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"jsonl:{self.path}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")
        self._lock = threading.Lock()

    def send(self, data: str) -> None:
        self._ensure_open()
        with self._lock:
            self._fh.write(data + "\n")
            self._fh.flush()
        logger.debug("JsonlFileListener: wrote %d bytes to %s", len(data), self.path)

    def _release(self) -> None:
        with self._lock:
            self._fh.close()
