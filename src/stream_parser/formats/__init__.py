"""Per-format translators from input records to unified events.

Each translator takes one decoded record (or one text line) plus the
shared ParserState and returns zero or more events, updating the turn
counter where the record marks a turn boundary.
"""

from . import claude_code, python_agent, text

__all__ = ["claude_code", "python_agent", "text"]
