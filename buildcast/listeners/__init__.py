"""Listener protocol for buildcast status fan-out.

A listener is one connected consumer.  The transport behind it owns the
open/closed lifecycle: ``close()`` shuts it down from our side, and the
callbacks registered through ``on_close`` fire once when the connection
closes for any reason.  ``ListenerRegistry`` relies on that notification
to drop listeners that went away.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


class ListenerClosedError(RuntimeError):
    """Raised by a transport when sending to a closed listener."""


@runtime_checkable
class Listener(Protocol):
    """Protocol that every buildcast listener transport must implement."""

    def send(self, data: str) -> None:
        """Deliver one serialized message."""
        ...

    def close(self) -> None:
        """Close the connection.  Must fire the close callbacks once."""
        ...

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register *callback* to run when the connection closes."""
        ...
