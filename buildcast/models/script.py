"""Event script models — declarative pipeline/listener event sequences.

A script is a JSON document of the form::

    {"steps": [
        {"kind": "client_invalid"},
        {"kind": "client_done", "result": {"hash": "A"}},
        {"kind": "join", "listener": "late"},
        {"kind": "server_done", "result": {"hash": "A", "errors": ["E1"]}}
    ]}

Used by ``buildcast replay`` to drive a coordinator without a real
compiler attached.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from buildcast.models.status import CompilationResult


class ScriptValidationError(ValueError):
    """Raised when an event script is malformed."""


class StepKind(str, Enum):
    """Every event a script can emit."""

    CLIENT_INVALID = "client_invalid"
    CLIENT_DONE = "client_done"
    SERVER_INVALID = "server_invalid"
    SERVER_DONE = "server_done"
    JOIN = "join"
    PUBLISH = "publish"
    SHUTDOWN = "shutdown"


_DONE_KINDS = {StepKind.CLIENT_DONE, StepKind.SERVER_DONE}


class ScriptStep(BaseModel):
    """One step of an event script."""

    model_config = ConfigDict(frozen=True)

    kind: StepKind
    result: CompilationResult | None = None
    listener: str | None = None
    payload: Any = None

    @model_validator(mode="after")
    def _check_fields(self) -> ScriptStep:
        if self.kind in _DONE_KINDS and self.result is None:
            raise ValueError(f"{self.kind.value} step requires a result")
        if self.kind not in _DONE_KINDS and self.result is not None:
            raise ValueError(f"{self.kind.value} step does not take a result")
        if self.kind == StepKind.PUBLISH and "payload" not in self.model_fields_set:
            raise ValueError("publish step requires a payload")
        return self


class EventScript(BaseModel):
    """An ordered list of script steps."""

    model_config = ConfigDict(frozen=True)

    steps: list[ScriptStep] = []

    @property
    def listener_names(self) -> list[str]:
        """Names of listeners joined by the script, in join order."""
        names: list[str] = []
        for step in self.steps:
            if step.kind == StepKind.JOIN:
                names.append(step.listener or f"listener-{len(names) + 1}")
        return names

    @classmethod
    def from_json(cls, raw: str | bytes) -> EventScript:
        """Parse and validate a JSON event script."""
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ScriptValidationError(f"Invalid JSON: {exc}") from exc

        # A bare list is accepted as shorthand for {"steps": [...]}
        if isinstance(data, list):
            data = {"steps": data}
        if not isinstance(data, dict):
            raise ScriptValidationError(
                f"Script must be a JSON object or array, got {type(data).__name__}"
            )

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ScriptValidationError(f"Script validation failed: {exc}") from exc

    @classmethod
    def load(cls, path: Path | str) -> EventScript:
        """Read and validate a script file."""
        return cls.from_json(Path(path).read_bytes())
