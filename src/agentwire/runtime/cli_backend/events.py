"""Translate CLI ``stream-json`` lines into Anthropic SSE event dicts.

The CLI prints one JSON object per line: ``system`` (init info),
``assistant`` (a complete message) and ``result`` (a run summary). Only
``assistant`` lines produce events. Each becomes the full Anthropic event
sequence, chunked at block boundaries only:

``message_start`` -> (``content_block_start``, ``content_block_delta``,
``content_block_stop``) per block -> ``message_delta`` -> ``message_stop``
"""

from __future__ import annotations

import json
import logging
from typing import Any

from agentwire.core.interface.ids import ToolUseIdFactory
from agentwire.core.polyfills.strategy import PromptedStrategy

logger = logging.getLogger(__name__)


def synthesize_sse_events(
    message: dict[str, Any],
    ids: ToolUseIdFactory,
    strategy: PromptedStrategy | None = None,
) -> list[dict[str, Any]]:
    """Return the Anthropic event sequence for one complete CLI message."""
    transformed = (strategy or PromptedStrategy()).interpret(message, ids)
    content = transformed["content"]
    events: list[dict[str, Any]] = [
        {"type": "message_start", "message": {**transformed, "content": []}}
    ]

    for index, block in enumerate(content):
        if block.get("type") == "text":
            start = {"type": "text", "text": ""}
            delta = {"type": "text_delta", "text": block.get("text", "")}
        elif block.get("type") == "tool_use":
            start = {
                "type": "tool_use",
                "id": block.get("id"),
                "name": block.get("name"),
                "input": {},
            }
            delta = {
                "type": "input_json_delta",
                "partial_json": json.dumps(block.get("input", {}), ensure_ascii=False),
            }
        else:
            continue
        events.append({"type": "content_block_start", "index": index, "content_block": start})
        events.append({"type": "content_block_delta", "index": index, "delta": delta})
        events.append({"type": "content_block_stop", "index": index})

    events.append(
        {
            "type": "message_delta",
            "delta": {
                "stop_reason": transformed.get("stop_reason") or "end_turn",
                "stop_sequence": transformed.get("stop_sequence"),
            },
            "usage": transformed.get("usage") or {},
        }
    )
    events.append({"type": "message_stop"})
    return events


def parse_stream_line(
    line: str,
    ids: ToolUseIdFactory,
    strategy: PromptedStrategy | None = None,
) -> list[dict[str, Any]]:
    """Return the events for one stdout line; housekeeping lines yield none."""
    if not line.strip():
        return []
    try:
        parsed = json.loads(line)
    except json.JSONDecodeError:
        logger.debug("Ignoring non-JSON CLI line: %.200s", line)
        return []
    if not isinstance(parsed, dict):
        return []

    kind = parsed.get("type")
    if kind == "assistant" and isinstance(parsed.get("message"), dict):
        return synthesize_sse_events(parsed["message"], ids, strategy)
    if kind == "error":
        logger.error("CLI error: %s", parsed.get("error") or parsed.get("message") or line)
    return []
