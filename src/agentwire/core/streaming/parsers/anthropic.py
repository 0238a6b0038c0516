"""Anthropic Messages stream parser (also used for the CLI emulator output)."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from agentwire.core.interface.models import (
    CanonicalMessage,
    ContentBlock,
    ParsedAssistantResult,
    StopReason,
    TextBlock,
    TokenUsage,
    ToolUseBlock,
)
from agentwire.core.streaming.parsers.base import (
    RECORD_ERRORS,
    as_int,
    as_str,
    iter_json_records,
    skip_record,
)

logger = logging.getLogger(__name__)

_STOP_REASONS: dict[str, StopReason] = {
    "end_turn": "end_turn",
    "tool_use": "tool_use",
    "max_tokens": "max_tokens",
    "stop_sequence": "end_turn",
}

_USAGE_FIELDS = (
    "input_tokens",
    "output_tokens",
    "cache_creation_input_tokens",
    "cache_read_input_tokens",
)


@dataclass
class _StreamState:
    blocks: list[dict[str, Any]] = field(default_factory=list)
    stop_reason: StopReason = "end_turn"
    usage: dict[str, int] = field(default_factory=dict)


class AnthropicStreamParser:
    """Assembles ``content_block_*`` events into one canonical message.

    ``tool_use`` input arrives as ``input_json_delta`` fragments; these are
    buffered per block and decoded once the stream has ended, falling back
    to ``{}`` when the buffered JSON does not parse. Blocks whose ``id`` or
    ``name`` is not a string are dropped.
    """

    def parse(self, raw: str) -> ParsedAssistantResult | None:
        state = _StreamState()

        for event, payload in iter_json_records(raw):
            try:
                _consume(state, event or payload.get("type"), payload)
            except RECORD_ERRORS as exc:
                skip_record(payload, exc)

        content = [b for b in (_finish_block(raw_block) for raw_block in state.blocks) if b]
        if not content:
            return None
        return ParsedAssistantResult(
            message=CanonicalMessage(role="assistant", content=content),
            stop_reason=state.stop_reason,
            usage=TokenUsage(**state.usage) if state.usage else None,
        )


def _consume(state: _StreamState, kind: Any, payload: dict[str, Any]) -> None:
    if kind == "message_start":
        message = payload.get("message")
        if isinstance(message, dict):
            _merge_usage(state.usage, message.get("usage"))
    elif kind == "content_block_start":
        block = payload.get("content_block")
        if isinstance(block, dict):
            state.blocks.append(dict(block))
    elif kind == "content_block_delta":
        _apply_delta(state.blocks, payload.get("delta"))
    elif kind == "message_delta":
        delta = payload.get("delta")
        if isinstance(delta, dict):
            reason = as_str(delta.get("stop_reason"))
            state.stop_reason = _STOP_REASONS.get(reason, state.stop_reason)
        _merge_usage(state.usage, payload.get("usage"))


def _apply_delta(blocks: list[dict[str, Any]], delta: Any) -> None:
    if not blocks or not isinstance(delta, dict):
        return
    last = blocks[-1]
    if delta.get("type") == "text_delta" and as_str(delta.get("text")):
        last["text"] = as_str(last.get("text")) + delta["text"]
    elif delta.get("type") == "input_json_delta" and as_str(delta.get("partial_json")):
        last["_partial_json"] = last.get("_partial_json", "") + delta["partial_json"]


def _finish_block(block: dict[str, Any]) -> ContentBlock | None:
    if block.get("type") == "text":
        return TextBlock(text=as_str(block.get("text")))
    if block.get("type") == "tool_use":
        if not isinstance(block.get("id", ""), str) or not isinstance(block.get("name", ""), str):
            logger.debug("Dropping tool_use block with malformed id or name: %.200s", block)
            return None
        partial = block.get("_partial_json")
        tool_input: Any = block.get("input", {})
        if partial is not None:
            try:
                tool_input = json.loads(partial)
            except json.JSONDecodeError:
                logger.debug("Tool input for %s is not valid JSON", block.get("name"))
                tool_input = {}
        return ToolUseBlock(
            id=block.get("id", ""),
            name=block.get("name", ""),
            input=tool_input,
        )
    return None


def _merge_usage(usage: dict[str, int], raw: Any) -> None:
    if not isinstance(raw, dict):
        return
    for key in _USAGE_FIELDS:
        value = as_int(raw.get(key))
        if value:
            usage[key] = max(usage.get(key, 0), value)
