"""Server-sent events framing.

:class:`SSEDecoder` is a small explicit state machine: feed it one line at a
time and it returns an :class:`SSEEvent` whenever a blank line completes a
record. :func:`format_sse` is the inverse used by the CLI emulator.
"""

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SSEEvent:
    """One dispatched SSE record."""

    data: str
    event: str | None = None

    def json(self) -> Any:
        """Decode ``data`` as JSON; raises ``ValueError`` on bad input."""
        return json.loads(self.data)


@dataclass
class SSEDecoder:
    """Line-oriented SSE parser state."""

    event: str | None = None
    data_lines: list[str] = field(default_factory=list)

    def feed(self, line: str) -> SSEEvent | None:
        """Consume one line (without its terminator) and maybe dispatch."""
        line = line.rstrip("\r\n")
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None

        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if name == "event":
            self.event = value
        elif name == "data":
            self.data_lines.append(value)
        return None

    def flush(self) -> SSEEvent | None:
        """Dispatch a record left pending when the input ended without a blank line."""
        return self._dispatch()

    def _dispatch(self) -> SSEEvent | None:
        if not self.data_lines:
            self.event = None
            return None
        evt = SSEEvent(data="\n".join(self.data_lines), event=self.event)
        self.event = None
        self.data_lines = []
        return evt


def iter_sse_events(text: str) -> Iterator[SSEEvent]:
    """Yield every event of a fully buffered SSE body."""
    decoder = SSEDecoder()
    for line in text.splitlines():
        evt = decoder.feed(line)
        if evt is not None:
            yield evt
    tail = decoder.flush()
    if tail is not None:
        yield tail


def format_sse(event: dict[str, Any]) -> str:
    """Render *event* as an SSE chunk named after its ``type``."""
    payload = json.dumps(event, separators=(",", ":"), ensure_ascii=False)
    return f"event: {event['type']}\ndata: {payload}\n\n"
