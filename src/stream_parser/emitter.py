"""Event emission and the sequential processing loop.

Each event is written as one JSON line and flushed immediately, so
consumers see events in input order with no batching. Delivery is best
effort: an event that cannot be serialized or written is dropped and the
loop moves on to the next line.
"""

from __future__ import annotations

import logging
from typing import Iterable, TextIO

from pydantic_core import PydanticSerializationError

from .models import UnifiedEvent
from .parser import StreamParser

logger = logging.getLogger(__name__)


class EventEmitter:
    """Writes unified events to a text stream, one per line."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.emitted = 0
        self.dropped = 0

    def emit(self, event: UnifiedEvent) -> bool:
        """Serialize, write and flush one event.

        Returns False when the event was dropped.
        """
        try:
            line = event.to_json_line()
        except (PydanticSerializationError, ValueError, TypeError) as exc:
            self.dropped += 1
            logger.debug("Dropping unserializable %s event: %s", event.type, exc)
            return False

        try:
            self.stream.write(line + "\n")
            self.stream.flush()
        except OSError as exc:
            self.dropped += 1
            logger.debug("Dropping %s event, write failed: %s", event.type, exc)
            return False

        self.emitted += 1
        return True


def run(parser: StreamParser, source: Iterable[str], sink: TextIO) -> int:
    """Translate ``source`` line by line until end of input.

    Returns the number of events written to ``sink``. A read error ends
    the loop the same way end of input does.
    """
    emitter = EventEmitter(sink)
    lines = iter(source)
    while True:
        try:
            line = next(lines)
        except StopIteration:
            break
        except (UnicodeDecodeError, OSError) as exc:
            logger.error("Error reading line: %s", exc)
            break

        for event in parser.parse_line(line):
            emitter.emit(event)

    if emitter.dropped:
        logger.info("Dropped %d of %d events", emitter.dropped, emitter.emitted + emitter.dropped)
    return emitter.emitted
