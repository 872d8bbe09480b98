"""Canonical event models for the agent output stream parser.

Defines the unified event schema that every input record is translated
into (UnifiedEvent with its EventType tag), the AgentFormat state machine
values, and the per-process ParserState threaded through every line.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class EventType(StrEnum):
    """Variant tag of a unified event."""

    TURN = "turn"
    THINKING = "thinking"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    TURN_END = "turn_end"
    ERROR = "error"
    RAW = "raw"
    OUTPUT = "output"


class AgentFormat(StrEnum):
    """Wire format of the input stream.

    ``UNKNOWN`` transitions to one of the concrete formats at most once
    per process and never changes afterwards.
    """

    UNKNOWN = "unknown"
    PYTHON = "python"  # flat record-per-line agent protocol
    CLAUDE = "claude"  # nested stream-json message protocol


def compact_json(value: Any) -> str:
    """Serialize a decoded JSON value back to compact single-line text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class UnifiedEvent(BaseModel):
    """One canonical event, serialized as one line of output.

    Only ``type`` is required. Every other field is absent until assigned,
    and absent fields are left out of the serialized form entirely. An
    explicitly assigned ``args=None`` is kept: it is the JSON ``null``
    payload of a tool call made without arguments.
    """

    type: EventType
    agent_id: str | None = None
    content: str | None = None
    tool: str | None = None
    args: Any = None
    result: str | None = None
    turn: int | None = Field(None, ge=0)
    tokens: int | None = Field(None, ge=0)
    status: str | None = None  # reserved by the wire schema; translators never set it
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

    def to_json_line(self) -> str:
        """Serialize to a single compact JSON line (no trailing newline)."""
        return compact_json(self.to_dict())


@dataclass
class ParserState:
    """Mutable per-process parser state.

    Owned exclusively by one StreamParser; lives for the duration of the
    input stream and is never persisted.
    """

    agent_id: str
    format: AgentFormat = AgentFormat.UNKNOWN
    current_turn: int = 0

    def event(self, event_type: EventType, **fields: Any) -> UnifiedEvent:
        """Build an event stamped with this parser's agent identity."""
        return UnifiedEvent(type=event_type, agent_id=self.agent_id, **fields)
