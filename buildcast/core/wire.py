"""Wire encoding for listener messages.

Status messages go out through their wire form; anything else handed to
``publish`` is encoded as-is.  Encoding is compact JSON with keys in
insertion order so ``action`` leads every status message.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from buildcast.models.status import StatusMessage


def to_jsonable(payload: Any) -> Any:
    """Convert *payload* into plain JSON-serializable data."""
    if isinstance(payload, StatusMessage):
        return payload.to_wire()
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    return payload


def encode(payload: Any) -> str:
    """Encode *payload* as the JSON text sent to listeners."""
    return json.dumps(to_jsonable(payload), separators=(",", ":"), default=str)


def decode(data: str | bytes) -> Any:
    """Decode JSON text received by a listener."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return json.loads(data)
