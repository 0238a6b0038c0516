"""Shared parser contract and record iteration."""

import json
import logging
from collections.abc import Iterator
from typing import Any, Protocol

from pydantic import ValidationError

from agentwire.core.interface.models import ParsedAssistantResult
from agentwire.core.streaming.sse import iter_sse_events

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"

# Raised while applying a record whose JSON decoded but has the wrong shape.
RECORD_ERRORS = (AttributeError, TypeError, ValueError, ValidationError)


class StreamParser(Protocol):
    """Turns one complete raw stream body into a finished assistant turn."""

    def parse(self, raw: str) -> ParsedAssistantResult | None:
        """Return the assembled turn, or ``None`` when no content was produced."""
        ...


def iter_json_records(raw: str) -> Iterator[tuple[str | None, dict[str, Any]]]:
    """Yield ``(event_name, payload)`` for every well-formed JSON object record.

    Records that are not JSON objects, and the OpenAI ``[DONE]`` sentinel,
    are skipped so that one bad record never aborts a parse.
    """
    for evt in iter_sse_events(raw):
        if evt.data == DONE_SENTINEL:
            continue
        try:
            payload = evt.json()
        except ValueError:
            logger.debug("Skipping malformed SSE record: %.200s", evt.data)
            continue
        if not isinstance(payload, dict):
            logger.debug("Skipping non-object SSE record: %.200s", evt.data)
            continue
        yield evt.event, payload


def as_int(value: Any) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def skip_record(payload: dict[str, Any], exc: Exception) -> None:
    logger.debug("Skipping SSE record with unexpected shape (%s): %.200s", exc, payload)
