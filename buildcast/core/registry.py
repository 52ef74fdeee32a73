"""Listener registry — fans status messages out to every connected listener.

Every message broadcast through the registry goes to every registered
listener.  A failure in one listener is logged and does not prevent
delivery to the rest.  Listeners are held under stable integer ids so
that a close notification removes exactly the listener it was registered
for, even when it arrives while a broadcast is in flight.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import TYPE_CHECKING, Any

from buildcast.core.wire import encode

if TYPE_CHECKING:
    from buildcast.listeners import Listener

logger = logging.getLogger(__name__)


class ListenerRegistry:
    """Holds the connected listeners and performs fan-out sends.

    Usage
    -----
    >>> registry = ListenerRegistry()
    >>> listener_id = registry.add(listener)
    >>> registry.broadcast({"action": "building"})
    >>> registry.close_all()
    """

    def __init__(self) -> None:
        self._listeners: dict[int, Listener] = {}
        self._ids = itertools.count(1)
        # Guards membership only; sends run on a snapshot.
        self._lock = threading.Lock()
        # Serializes sends so each listener sees broadcasts in call order.
        self._send_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def add(self, listener: Listener) -> int:
        """Register *listener* and return its id.

        The listener is removed automatically when its connection closes.
        """
        with self._lock:
            listener_id = next(self._ids)
            self._listeners[listener_id] = listener
        listener.on_close(lambda: self.remove(listener_id))
        logger.info("Listener %d joined (%d connected)", listener_id, len(self))
        return listener_id

    def remove(self, listener_id: int) -> None:
        """Drop a listener by id.  Unknown ids are ignored."""
        with self._lock:
            removed = self._listeners.pop(listener_id, None)
        if removed is not None:
            logger.info("Listener %d left (%d connected)", listener_id, len(self))

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    @property
    def listener_ids(self) -> list[int]:
        """Ids of the currently registered listeners, in join order."""
        with self._lock:
            return list(self._listeners)

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def broadcast(self, message: Any) -> list[int]:
        """Send *message* to every registered listener.

        Returns the ids of listeners that accepted the message.  Send
        failures are logged and skipped.  A message that cannot be
        encoded is logged and reaches nobody.
        """
        data = self.encode_message(message)
        if data is None:
            return []
        return self.broadcast_encoded(data)

    def broadcast_encoded(self, data: str) -> list[int]:
        """Send already-encoded *data* to every registered listener."""
        with self._send_lock:
            with self._lock:
                targets = list(self._listeners.items())
            delivered: list[int] = []
            for listener_id, listener in targets:
                if self._deliver(listener_id, listener, data):
                    delivered.append(listener_id)

        if len(delivered) < len(targets):
            logger.warning(
                "Broadcast reached %d/%d listeners",
                len(delivered),
                len(targets),
            )
        return delivered

    def send_to(self, listener_id: int, message: Any) -> bool:
        """Send *message* to a single listener.  Returns whether it was accepted."""
        with self._lock:
            listener = self._listeners.get(listener_id)
        if listener is None:
            return False
        data = self.encode_message(message)
        if data is None:
            return False
        with self._send_lock:
            return self._deliver(listener_id, listener, data)

    @staticmethod
    def encode_message(message: Any) -> str | None:
        """Encode *message* for the wire, or log and return ``None``."""
        try:
            return encode(message)
        except (TypeError, ValueError) as exc:
            logger.error("Message is not JSON-serializable: %s", exc)
            return None

    @staticmethod
    def _deliver(listener_id: int, listener: Listener, data: str) -> bool:
        try:
            listener.send(data)
        except Exception as exc:  # noqa: BLE001
            logger.error("Send to listener %d failed: %s", listener_id, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def close_all(self) -> None:
        """Close every listener's connection, then empty the registry."""
        with self._lock:
            targets = list(self._listeners.items())
            self._listeners.clear()
        for listener_id, listener in targets:
            try:
                listener.close()
            except Exception as exc:  # noqa: BLE001
                logger.error("Closing listener %d failed: %s", listener_id, exc)
        if targets:
            logger.info("Closed %d listeners", len(targets))
