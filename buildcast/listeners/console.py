"""Console listener — prints each received message to a Rich console."""

from __future__ import annotations

from rich.console import Console

from buildcast.core.wire import decode
from buildcast.listeners._base import ClosableListener
from buildcast.monitor.renderer import StatusRenderer


class ConsoleListener(ClosableListener):
    """Renders every message through ``StatusRenderer``.

    Parameters
    ----------
    console:
        Rich Console to print to.  A new one is created if not provided.
    name:
        Label printed before each message.
    """

    def __init__(self, console: Console | None = None, name: str = "console") -> None:
        super().__init__(name)
        self.renderer = StatusRenderer(console=console)

    def send(self, data: str) -> None:
        self._ensure_open()
        self.renderer.print_message(decode(data), source=self.name)
