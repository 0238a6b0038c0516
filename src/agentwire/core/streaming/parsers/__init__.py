"""Vendor stream parsers and explicit vendor dispatch."""

from agentwire.core.interface.models import ParsedAssistantResult
from agentwire.core.interface.vendor import Vendor
from agentwire.core.streaming.parsers.anthropic import AnthropicStreamParser
from agentwire.core.streaming.parsers.base import StreamParser
from agentwire.core.streaming.parsers.gemini import GeminiStreamParser
from agentwire.core.streaming.parsers.openai import OpenAIStreamParser
from agentwire.utils.telemetry import ATTR_RAW_BYTES, ATTR_VENDOR, get_tracer, record_result

_tracer = get_tracer(__name__)


def get_parser(vendor: Vendor | str) -> StreamParser:
    """Return a fresh parser for *vendor*'s stream family."""
    family = Vendor(vendor).family
    if family == "gemini":
        return GeminiStreamParser()
    if family == "openai":
        return OpenAIStreamParser()
    return AnthropicStreamParser()


def parse_stream(vendor: Vendor | str, raw: str) -> ParsedAssistantResult | None:
    """Parse a complete raw stream body from *vendor*."""
    vendor = Vendor(vendor)
    with _tracer.start_as_current_span("stream.parse") as span:
        span.set_attribute(ATTR_VENDOR, vendor.value)
        span.set_attribute(ATTR_RAW_BYTES, len(raw))
        result = get_parser(vendor).parse(raw)
        record_result(span, result)
        return result


__all__ = [
    "AnthropicStreamParser",
    "GeminiStreamParser",
    "OpenAIStreamParser",
    "StreamParser",
    "get_parser",
    "parse_stream",
]
