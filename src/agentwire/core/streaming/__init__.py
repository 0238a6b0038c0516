"""Stream framing and vendor stream parsers."""

from agentwire.core.streaming.parsers import get_parser, parse_stream
from agentwire.core.streaming.sse import SSEDecoder, SSEEvent, format_sse, iter_sse_events

__all__ = [
    "SSEDecoder",
    "SSEEvent",
    "format_sse",
    "get_parser",
    "iter_sse_events",
    "parse_stream",
]
