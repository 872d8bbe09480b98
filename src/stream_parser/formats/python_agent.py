"""Translator for the flat record-per-line agent protocol.

Records look like ``{"type": "turn", "number": 3}`` or
``{"type": "tool_call", "tool": "bash", "args": {...}}``. A recognized
record missing one of its required fields produces no event; an
unrecognized record is passed through verbatim as a ``raw`` event.
"""

from __future__ import annotations

from typing import Any

from ..models import EventType, ParserState, UnifiedEvent, compact_json


def _unsigned(value: Any) -> int | None:
    """Return ``value`` when it is a non-negative JSON integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def _with_tokens(record: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    tokens = _unsigned(record.get("tokens"))
    if tokens is not None:
        fields["tokens"] = tokens
    return fields


def translate(record: dict[str, Any], state: ParserState) -> list[UnifiedEvent]:
    record_type = record.get("type")

    if record_type == "turn":
        number = _unsigned(record.get("number"))
        if number is None:
            return []
        state.current_turn = number
        return [state.event(EventType.TURN, turn=number)]

    if record_type == "thinking":
        content = record.get("content")
        if not isinstance(content, str):
            return []
        return [state.event(EventType.THINKING, **_with_tokens(record, {"content": content}))]

    if record_type == "tool_call":
        tool = record.get("tool")
        if not isinstance(tool, str):
            return []
        return [state.event(EventType.TOOL_CALL, tool=tool, args=record.get("args"))]

    if record_type == "tool_result":
        content = record.get("content")
        if not isinstance(content, str):
            return []
        return [state.event(EventType.TOOL_RESULT, **_with_tokens(record, {"result": content}))]

    return [state.event(EventType.RAW, content=compact_json(record))]
