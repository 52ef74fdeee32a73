"""Status wire models — what listeners receive and what pipelines report."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class StatusAction(str, Enum):
    """The three status actions a listener can observe."""

    BUILDING = "building"
    BUILT = "built"
    SYNC = "sync"


class CompilationResult(BaseModel):
    """Summary of one finished compilation, as reported by a target's done event.

    ``warnings`` and ``errors`` may be omitted by the pipeline; the
    status-derivation rule normalizes them to empty lists.  When
    ``has_errors`` is not given it is derived from ``errors``.
    """

    model_config = ConfigDict(frozen=True)

    hash: str
    has_errors: bool = False
    warnings: list[str] | None = None
    errors: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_has_errors(cls, data: object) -> object:
        if isinstance(data, dict) and "has_errors" not in data:
            data = {**data, "has_errors": bool(data.get("errors"))}
        return data


class StatusMessage(BaseModel):
    """The payload broadcast to listeners.

    Wire form for ``built``/``sync`` is a JSON object with ``action``,
    ``hash``, ``warnings`` and ``errors``.  A ``building`` message carries
    only ``action``.
    """

    model_config = ConfigDict(frozen=True)

    action: StatusAction
    hash: str | None = None
    warnings: list[str] = []
    errors: list[str] = []

    def to_wire(self) -> dict:
        """Return the JSON-ready dict sent to listeners."""
        if self.action == StatusAction.BUILDING:
            return {"action": self.action.value}
        return self.model_dump(mode="json", exclude_none=True)


BUILDING = StatusMessage(action=StatusAction.BUILDING)


def status_from_result(action: StatusAction, result: CompilationResult) -> StatusMessage:
    """Derive the status message for *result* tagged with *action*."""
    return StatusMessage(
        action=action,
        hash=result.hash,
        warnings=list(result.warnings or []),
        errors=list(result.errors or []),
    )
