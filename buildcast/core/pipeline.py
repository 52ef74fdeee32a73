"""Compilation target hooks — the pipeline side of the coordinator.

A compilation target is anything that lets the coordinator register
callbacks for two events: "invalid" (a rebuild started) and
"done(result)" (a build finished).  ``TargetHooks`` is a small
in-process implementation that a pipeline drives directly.

Hooks cannot be unregistered; consumers that need to stop reacting
keep their own closed flag.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from buildcast.models.status import CompilationResult

logger = logging.getLogger(__name__)

InvalidCallback = Callable[[], None]
DoneCallback = Callable[[CompilationResult], None]


@runtime_checkable
class CompilationTarget(Protocol):
    """Protocol every compilation target handle must implement."""

    def on_invalid(self, callback: InvalidCallback) -> None:
        """Register *callback* for the target's invalidated event."""
        ...

    def on_done(self, callback: DoneCallback) -> None:
        """Register *callback* for the target's done event."""
        ...


class TargetHooks:
    """In-process hook hub for one compilation target.

    Parameters
    ----------
    name:
        Human-readable target name (e.g. ``"client"``, ``"server"``).
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._invalid: list[InvalidCallback] = []
        self._done: list[DoneCallback] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"TargetHooks({self.name!r})"

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on_invalid(self, callback: InvalidCallback) -> None:
        with self._lock:
            self._invalid.append(callback)

    def on_done(self, callback: DoneCallback) -> None:
        with self._lock:
            self._done.append(callback)

    # ------------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------------

    def invalidate(self) -> None:
        """Fire the invalidated event to every registered callback."""
        with self._lock:
            callbacks = list(self._invalid)
        logger.debug("%s: invalidated (%d hooks)", self.name, len(callbacks))
        for callback in callbacks:
            callback()

    def done(self, result: CompilationResult) -> None:
        """Fire the done event with *result* to every registered callback."""
        with self._lock:
            callbacks = list(self._done)
        logger.debug(
            "%s: done hash=%s errors=%s (%d hooks)",
            self.name,
            result.hash,
            result.has_errors,
            len(callbacks),
        )
        for callback in callbacks:
            callback(result)
