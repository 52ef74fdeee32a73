"""Shared test fixtures for buildcast."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from buildcast.core.coordinator import BuildStatusCoordinator
from buildcast.core.pipeline import TargetHooks
from buildcast.core.registry import ListenerRegistry
from buildcast.listeners.memory import MemoryListener
from buildcast.models.status import CompilationResult


@pytest.fixture
def client() -> TargetHooks:
    """Provide the client compilation target hooks."""
    return TargetHooks("client")


@pytest.fixture
def server() -> TargetHooks:
    """Provide the server compilation target hooks."""
    return TargetHooks("server")


@pytest.fixture
def registry() -> ListenerRegistry:
    """Provide an empty ListenerRegistry."""
    return ListenerRegistry()


@pytest.fixture
def coordinator(
    client: TargetHooks, server: TargetHooks, registry: ListenerRegistry
) -> BuildStatusCoordinator:
    """Provide a coordinator wired to the test targets and registry."""
    return BuildStatusCoordinator(client, server, registry)


@pytest.fixture
def listener(coordinator: BuildStatusCoordinator) -> MemoryListener:
    """Provide a MemoryListener joined before any pipeline events."""
    joined = MemoryListener("early")
    coordinator.on_listener_join(joined)
    return joined


# ---------------------------------------------------------------------------
# Result factory — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_result() -> Callable[..., CompilationResult]:
    """Factory fixture: build a CompilationResult with sensible defaults."""

    def _factory(
        hash: str = "A",
        errors: list[str] | None = None,
        warnings: list[str] | None = None,
        **overrides: Any,
    ) -> CompilationResult:
        defaults: dict[str, Any] = {
            "hash": hash,
            "errors": errors if errors is not None else [],
            "warnings": warnings if warnings is not None else [],
        }
        defaults.update(overrides)
        return CompilationResult(**defaults)

    return _factory
