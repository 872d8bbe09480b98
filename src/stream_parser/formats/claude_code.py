"""Translator for the nested stream-json message protocol.

Handles both whole-message records (``assistant`` with a list of content
blocks, ``result``) and the incremental streaming records
(``message_start``, ``content_block_start``, ``content_block_delta``,
``message_stop``). Turn numbers are implicit here: every
``message_start`` opens the next turn.

Content blocks nested inside a message are translated by
:func:`translate_block`. Unlike top-level records, unrecognized blocks are
dropped rather than passed through.
"""

from __future__ import annotations

from typing import Any

from ..models import EventType, ParserState, UnifiedEvent, compact_json

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def translate_block(block: Any, state: ParserState) -> list[UnifiedEvent]:
    """Translate a single content block (text span, tool use or tool result)."""
    if not isinstance(block, dict):
        return []

    block_type = block.get("type")

    if block_type == "text":
        text = block.get("text")
        if isinstance(text, str):
            return [state.event(EventType.THINKING, content=text)]
    elif block_type == "tool_use":
        name = block.get("name")
        if isinstance(name, str):
            return [state.event(EventType.TOOL_CALL, tool=name, args=block.get("input"))]
    elif block_type == "tool_result":
        content = block.get("content")
        if isinstance(content, str):
            return [state.event(EventType.TOOL_RESULT, result=content)]

    return []


def translate(record: dict[str, Any], state: ParserState) -> list[UnifiedEvent]:
    record_type = record.get("type")

    if record_type == "assistant":
        blocks = _as_dict(record.get("message")).get("content")
        if not isinstance(blocks, list):
            return []
        events: list[UnifiedEvent] = []
        for block in blocks:
            events.extend(translate_block(block, state))
        return events

    if record_type == "content_block_start":
        return translate_block(record.get("content_block"), state)

    if record_type == "content_block_delta":
        text = _as_dict(record.get("delta")).get("text")
        if not isinstance(text, str):
            return []
        return [state.event(EventType.THINKING, content=text)]

    if record_type == "result":
        if "result" not in record:
            return []
        result = record["result"]
        if not isinstance(result, str):
            result = compact_json(result)
        return [state.event(EventType.TOOL_RESULT, result=result)]

    if record_type == "message_start":
        state.current_turn += 1
        return [state.event(EventType.TURN, turn=state.current_turn)]

    if record_type == "message_stop":
        return [state.event(EventType.TURN_END, turn=state.current_turn)]

    if record_type == "error":
        message = _as_dict(record.get("error")).get("message")
        if not isinstance(message, str):
            message = UNKNOWN_ERROR_MESSAGE
        return [state.event(EventType.ERROR, error=message)]

    return [state.event(EventType.RAW, content=compact_json(record))]
