"""buildcast data models — all Pydantic v2."""

from buildcast.models.coordinator import (
    CoordinatorSnapshot,
    CoordinatorState,
    VisibleState,
)
from buildcast.models.script import (
    EventScript,
    ScriptStep,
    ScriptValidationError,
    StepKind,
)
from buildcast.models.status import (
    BUILDING,
    CompilationResult,
    StatusAction,
    StatusMessage,
    status_from_result,
)

__all__ = [
    # status
    "StatusAction",
    "StatusMessage",
    "CompilationResult",
    "BUILDING",
    "status_from_result",
    # coordinator
    "VisibleState",
    "CoordinatorState",
    "CoordinatorSnapshot",
    # scripts
    "StepKind",
    "ScriptStep",
    "EventScript",
    "ScriptValidationError",
]
