"""Heuristic translator for plain-text agent output.

Used for every line that is not a JSON object. Rules are tried in a fixed
order and the first match consumes the whole line:

1. ``[Turn N]`` turn markers
2. ``$ command`` shell commands
3. ``[tool] detail`` tool markers
4. anything else is plain ``output``
"""

from __future__ import annotations

import re

from ..models import EventType, ParserState, UnifiedEvent

TURN_PREFIX = "[Turn "
COMMAND_PREFIX = "$ "

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _turn_marker(text: str) -> int | None:
    if not text.startswith(TURN_PREFIX):
        return None
    end = text.find("]")
    if end < 0:
        return None
    number = text[len(TURN_PREFIX):end]
    if not _UNSIGNED.fullmatch(number):
        return None
    return int(number)


def translate(text: str, state: ParserState) -> list[UnifiedEvent]:
    turn = _turn_marker(text)
    if turn is not None:
        state.current_turn = turn
        return [state.event(EventType.TURN, turn=turn)]

    if text.startswith(COMMAND_PREFIX):
        command = text[len(COMMAND_PREFIX):]
        return [state.event(EventType.TOOL_CALL, tool="bash", args={"command": command})]

    # A malformed "[Turn X]" marker lands here as a tool named "Turn X".
    if text.startswith("["):
        end = text.find("]")
        if end >= 0:
            info = text[end + 1:].strip()
            return [state.event(EventType.TOOL_CALL, tool=text[1:end], args={"info": info})]

    return [state.event(EventType.OUTPUT, content=text)]
