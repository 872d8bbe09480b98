"""Line classification and format dispatch.

StreamParser turns one input line at a time into unified events. Lines
that decode as one complete JSON document go through format detection
(once) and the matching translator; everything else goes through the
plain-text heuristics.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Iterable, Iterator

from .detect import detect_format, resolve_format_hint
from .formats import claude_code, python_agent, text
from .models import AgentFormat, ParserState, UnifiedEvent

logger = logging.getLogger(__name__)

DEFAULT_AGENT_ID = "unknown"
MAX_NESTING_DEPTH = 128


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def _too_deep(value: Any, limit: int) -> bool:
    pending = [(value, 1)]
    while pending:
        item, depth = pending.pop()
        if isinstance(item, dict):
            children = item.values()
        elif isinstance(item, list):
            children = item
        else:
            continue
        if depth > limit:
            return True
        pending.extend((child, depth + 1) for child in children)
    return False


def decode_json(line: str) -> Any:
    """Decode ``line`` as one complete, strict JSON document.

    Raises:
        ValueError: If the line is not JSON, uses ``NaN``/``Infinity``,
            holds a number outside the float range, or nests objects and
            arrays deeper than MAX_NESTING_DEPTH
    """
    try:
        value = json.loads(line, parse_constant=_reject_constant, parse_float=_finite_float)
    except RecursionError as exc:
        raise ValueError("JSON nested too deeply") from exc
    if _too_deep(value, MAX_NESTING_DEPTH):
        raise ValueError("JSON nested too deeply")
    return value


class StreamParser:
    """Stateful translator from agent output lines to unified events."""

    def __init__(
        self,
        agent_id: str = DEFAULT_AGENT_ID,
        format_hint: str | None = None,
        *,
        max_line_length: int | None = None,
    ) -> None:
        self.state = ParserState(agent_id=agent_id, format=resolve_format_hint(format_hint))
        self.max_line_length = max_line_length

    @property
    def format(self) -> AgentFormat:
        return self.state.format

    def parse_line(self, line: str) -> list[UnifiedEvent]:
        """Translate one input line into zero or more events."""
        stripped = line.strip()
        if not stripped:
            return []

        if self.max_line_length and len(stripped) > self.max_line_length:
            logger.warning(
                "Truncating %d-character line to %d characters",
                len(stripped),
                self.max_line_length,
            )
            stripped = stripped[: self.max_line_length]

        try:
            document = decode_json(stripped)
        except ValueError:
            return text.translate(stripped, self.state)
        return self._parse_document(document)

    def parse_lines(self, lines: Iterable[str]) -> Iterator[UnifiedEvent]:
        for line in lines:
            yield from self.parse_line(line)

    def _parse_document(self, record: Any) -> list[UnifiedEvent]:
        # Scalars and arrays are valid JSON but no record of either format.
        if not isinstance(record, dict):
            return []

        if self.state.format is AgentFormat.UNKNOWN:
            detected = detect_format(record)
            if detected is not AgentFormat.UNKNOWN:
                logger.debug("Detected %s stream format", detected)
                self.state.format = detected

        if self.state.format is AgentFormat.PYTHON:
            return python_agent.translate(record, self.state)
        if self.state.format is AgentFormat.CLAUDE:
            return claude_code.translate(record, self.state)

        # Still undetected: the flat protocol gets the first attempt. A
        # successful fallback does not commit the format.
        events = python_agent.translate(record, self.state)
        if events:
            return events
        return claude_code.translate(record, self.state)
