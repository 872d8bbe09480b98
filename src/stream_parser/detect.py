"""Wire format detection for agent output streams.

Detection looks at the first JSON object of the stream only. Once the
parser commits to a format it never re-runs detection, so a stream is
assumed to be homogeneous after its first recognizable record.
"""

from __future__ import annotations

import logging
from typing import Any

from .models import AgentFormat

logger = logging.getLogger(__name__)

CLAUDE_RECORD_TYPES = frozenset({"assistant", "user", "result", "system"})
PYTHON_RECORD_TYPES = frozenset({"turn", "thinking", "tool_call", "tool_result"})

FORMAT_HINTS: dict[str, AgentFormat] = {
    "python": AgentFormat.PYTHON,
    "claude": AgentFormat.CLAUDE,
}


def detect_format(record: dict[str, Any]) -> AgentFormat:
    """Guess the wire format from one decoded JSON object.

    An explicit ``type`` discriminator wins. A top-level ``message`` key is
    the weaker structural signal for the stream-json protocol. Anything
    else stays ``UNKNOWN``.
    """
    record_type = record.get("type")
    if isinstance(record_type, str):
        if record_type in CLAUDE_RECORD_TYPES:
            return AgentFormat.CLAUDE
        if record_type in PYTHON_RECORD_TYPES:
            return AgentFormat.PYTHON

    if "message" in record:
        return AgentFormat.CLAUDE

    return AgentFormat.UNKNOWN


def resolve_format_hint(hint: str | None) -> AgentFormat:
    """Map a caller-supplied hint token to a format.

    Unrecognized tokens are equivalent to no hint at all.
    """
    if hint is None:
        return AgentFormat.UNKNOWN
    resolved = FORMAT_HINTS.get(hint)
    if resolved is None:
        logger.debug("Ignoring unrecognized format hint %r", hint)
        return AgentFormat.UNKNOWN
    return resolved
