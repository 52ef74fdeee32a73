"""Build status coordinator — one visible status from two compilation targets.

The client and server targets each report "invalid" and "done" events,
independently and in any order.  The coordinator folds them into one
externally visible status and pushes every change through the
``ListenerRegistry``.

Rules
-----
- A standing server error masks all client-driven updates.  Client
  results are still recorded while masked.
- Only a server "invalid" clears a server error; when it does, the last
  client result is promoted and re-broadcast.
- A server "done" without errors never publishes on its own.
- After ``shutdown()`` every entry point is a no-op.  Hooks cannot be
  unregistered from a target, so the closed flag is the only off switch.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from buildcast.core.registry import ListenerRegistry
from buildcast.models.coordinator import (
    CoordinatorSnapshot,
    CoordinatorState,
    VisibleState,
)
from buildcast.models.status import (
    BUILDING,
    CompilationResult,
    StatusAction,
    status_from_result,
)

if TYPE_CHECKING:
    from buildcast.core.pipeline import CompilationTarget
    from buildcast.listeners import Listener

logger = logging.getLogger(__name__)


class BuildStatusCoordinator:
    """Tracks client/server build state and broadcasts status changes.

    Parameters
    ----------
    client:
        The client compilation target.
    server:
        The server compilation target.
    registry:
        Listener registry to broadcast through.  A fresh one is created
        if not provided.
    """

    def __init__(
        self,
        client: CompilationTarget,
        server: CompilationTarget,
        registry: ListenerRegistry | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ListenerRegistry()
        self._state = CoordinatorState()
        self._lock = threading.RLock()
        self._broadcast_count = 0

        client.on_invalid(self.on_client_invalid)
        client.on_done(self.on_client_done)
        server.on_invalid(self.on_server_invalid)
        server.on_done(self.on_server_done)

    # ------------------------------------------------------------------
    # Pipeline events
    # ------------------------------------------------------------------

    def on_client_invalid(self) -> None:
        with self._lock:
            if self._state.closed or self._state.server_has_error:
                return
            self._state.latest_status = None
            self._state.visible = VisibleState.BUILDING
            self._broadcast(BUILDING)

    def on_client_done(self, result: CompilationResult) -> None:
        with self._lock:
            # Recorded even while masked so it can be promoted later
            self._state.client_latest_status = result
            if self._state.closed or self._state.server_has_error:
                return
            self._state.latest_status = result
            self._state.visible = VisibleState.BUILT
            self._broadcast(status_from_result(StatusAction.BUILT, result))

    def on_server_invalid(self) -> None:
        with self._lock:
            if self._state.closed or not self._state.server_has_error:
                return
            self._state.server_has_error = False
            client_result = self._state.client_latest_status
            if client_result is None:
                # Nothing to unmask; the error result stays replayable
                self._state.visible = VisibleState.BUILT
                return
            logger.debug("Server error cleared; promoting client %s", client_result.hash)
            self._state.latest_status = client_result
            self._state.visible = VisibleState.BUILT
            self._broadcast(status_from_result(StatusAction.BUILT, client_result))

    def on_server_done(self, result: CompilationResult) -> None:
        with self._lock:
            if self._state.closed:
                return
            self._state.server_has_error = result.has_errors
            if not result.has_errors:
                if self._state.visible == VisibleState.SERVER_ERROR:
                    self._state.visible = VisibleState.BUILT
                return
            logger.debug("Server build %s failed; masking client updates", result.hash)
            self._state.latest_status = result
            self._state.visible = VisibleState.SERVER_ERROR
            self._broadcast(status_from_result(StatusAction.BUILT, result))

    # ------------------------------------------------------------------
    # Surrounding-system operations
    # ------------------------------------------------------------------

    def on_listener_join(self, listener: Listener) -> int | None:
        """Register *listener* and replay the current status to it.

        Returns the listener id, or ``None`` if the coordinator is closed.
        """
        with self._lock:
            if self._state.closed:
                return None
            listener_id = self._registry.add(listener)
            latest = self._state.latest_status
            if latest is not None:
                self._registry.send_to(
                    listener_id, status_from_result(StatusAction.SYNC, latest)
                )
            return listener_id

    def publish(self, payload: Any) -> None:
        """Broadcast an arbitrary payload verbatim to every listener."""
        with self._lock:
            if self._state.closed:
                return
            self._broadcast(payload)

    def shutdown(self) -> None:
        """Stop reacting to events and close every listener.  Idempotent."""
        with self._lock:
            if self._state.closed:
                return
            self._state.closed = True
            logger.info("Shutting down; closing %d listeners", len(self._registry))
            self._registry.close_all()

    close = shutdown

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._state.closed

    @property
    def server_has_error(self) -> bool:
        return self._state.server_has_error

    @property
    def latest_status(self) -> CompilationResult | None:
        return self._state.latest_status

    @property
    def client_latest_status(self) -> CompilationResult | None:
        return self._state.client_latest_status

    @property
    def visible_state(self) -> VisibleState:
        return self._state.visible

    @property
    def listener_count(self) -> int:
        return len(self._registry)

    @property
    def broadcast_count(self) -> int:
        """Number of broadcasts issued since construction."""
        return self._broadcast_count

    def snapshot(self) -> CoordinatorSnapshot:
        """Return a consistent point-in-time view of the coordinator."""
        with self._lock:
            latest = self._state.latest_status
            client = self._state.client_latest_status
            return CoordinatorSnapshot(
                visible=self._state.visible,
                latest_hash=latest.hash if latest else None,
                latest_error_count=len(latest.errors or []) if latest else 0,
                latest_warning_count=len(latest.warnings or []) if latest else 0,
                client_hash=client.hash if client else None,
                server_has_error=self._state.server_has_error,
                closed=self._state.closed,
                listener_count=len(self._registry),
                broadcast_count=self._broadcast_count,
            )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _broadcast(self, message: Any) -> None:
        data = self._registry.encode_message(message)
        if data is None:
            return
        self._broadcast_count += 1
        logger.debug("Broadcast #%d: %s", self._broadcast_count, data)
        self._registry.broadcast_encoded(data)
