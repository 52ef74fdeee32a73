"""Coordinator state models — the mutable state record and its read-only snapshot."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from buildcast.models.status import CompilationResult


class VisibleState(str, Enum):
    """The externally visible build status."""

    IDLE = "idle"
    BUILDING = "building"
    BUILT = "built"
    SERVER_ERROR = "server_error"


class CoordinatorState(BaseModel):
    """Mutable state owned exclusively by ``BuildStatusCoordinator``.

    ``client_latest_status`` survives server-error periods even though
    ``latest_status`` does not; it is what gets promoted once the server
    error clears.
    """

    model_config = ConfigDict(validate_assignment=True)

    latest_status: CompilationResult | None = None
    client_latest_status: CompilationResult | None = None
    server_has_error: bool = False
    closed: bool = False
    visible: VisibleState = VisibleState.IDLE


class CoordinatorSnapshot(BaseModel):
    """Point-in-time view of a coordinator, for monitoring and the CLI."""

    model_config = ConfigDict(frozen=True)

    visible: VisibleState
    latest_hash: str | None = None
    latest_error_count: int = 0
    latest_warning_count: int = 0
    client_hash: str | None = None
    server_has_error: bool = False
    closed: bool = False
    listener_count: int = 0
    broadcast_count: int = 0
