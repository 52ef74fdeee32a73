"""Script runner — drives a coordinator from an ``EventScript``.

Owns a client/server ``TargetHooks`` pair and a coordinator wired to
them.  ``join`` steps attach a ``MemoryListener`` under the step's name
so that what each listener saw can be inspected after the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from buildcast.core.coordinator import BuildStatusCoordinator
from buildcast.core.pipeline import TargetHooks
from buildcast.core.registry import ListenerRegistry
from buildcast.listeners.memory import MemoryListener
from buildcast.models.script import EventScript, ScriptStep, StepKind

if TYPE_CHECKING:
    from buildcast.listeners import Listener

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Replays event scripts against a fresh coordinator.

    Parameters
    ----------
    listeners:
        Listeners attached before the first step (e.g. console output).
    registry:
        Listener registry for the coordinator.  A fresh one if omitted.
    """

    def __init__(
        self,
        listeners: list[Listener] | None = None,
        registry: ListenerRegistry | None = None,
    ) -> None:
        self.client = TargetHooks("client")
        self.server = TargetHooks("server")
        self.coordinator = BuildStatusCoordinator(self.client, self.server, registry)
        self.joined: dict[str, MemoryListener] = {}
        for listener in listeners or []:
            self.coordinator.on_listener_join(listener)

    def run(self, script: EventScript) -> dict[str, MemoryListener]:
        """Apply every step in order.  Returns the listeners joined by the script."""
        for index, step in enumerate(script.steps):
            logger.debug("Step %d: %s", index, step.kind.value)
            self.apply(step)
        return dict(self.joined)

    def apply(self, step: ScriptStep) -> None:
        """Apply a single step."""
        if step.kind == StepKind.CLIENT_INVALID:
            self.client.invalidate()
        elif step.kind == StepKind.CLIENT_DONE:
            self.client.done(step.result)
        elif step.kind == StepKind.SERVER_INVALID:
            self.server.invalidate()
        elif step.kind == StepKind.SERVER_DONE:
            self.server.done(step.result)
        elif step.kind == StepKind.JOIN:
            name = step.listener or f"listener-{len(self.joined) + 1}"
            listener = MemoryListener(name)
            self.joined[name] = listener
            self.coordinator.on_listener_join(listener)
        elif step.kind == StepKind.PUBLISH:
            self.coordinator.publish(step.payload)
        elif step.kind == StepKind.SHUTDOWN:
            self.coordinator.shutdown()
