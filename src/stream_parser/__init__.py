"""Agent output stream parser.

Translates line-oriented agent output (flat agent records, stream-json
messages, or free text) into one canonical unified event schema.

Public API surface -- all consumers import from this package.
"""

from .config import ParserConfig, ParserConfigError, load_parser_config
from .detect import detect_format, resolve_format_hint
from .emitter import EventEmitter, run
from .models import AgentFormat, EventType, ParserState, UnifiedEvent
from .parser import DEFAULT_AGENT_ID, StreamParser, decode_json

__all__ = [
    "AgentFormat",
    "DEFAULT_AGENT_ID",
    "EventEmitter",
    "EventType",
    "ParserConfig",
    "ParserConfigError",
    "ParserState",
    "StreamParser",
    "UnifiedEvent",
    "decode_json",
    "detect_format",
    "load_parser_config",
    "resolve_format_hint",
    "run",
]
