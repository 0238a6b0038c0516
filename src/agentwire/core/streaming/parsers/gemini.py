"""Gemini native ``streamGenerateContent?alt=sse`` parser."""

import copy
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

_BLOCKED_REASONS = frozenset({"SAFETY", "RECITATION"})


@dataclass
class _StreamState:
    text: str = ""
    tool_uses: list[ToolUseBlock] = field(default_factory=list)
    finish: str | None = None
    usage: TokenUsage | None = None


class GeminiStreamParser:
    """Collects ``candidates[0].content.parts`` across the stream.

    All text is concatenated into a single leading text block; function
    calls follow in arrival order with ids ``gemini_tc_<n>`` numbered per
    parse. ``thought`` parts are dropped. Gemini reports ``STOP`` for both
    plain and tool-calling turns, so the stop reason is resolved after the
    whole stream has been read.
    """

    def parse(self, raw: str) -> ParsedAssistantResult | None:
        state = _StreamState()
        for _, payload in iter_json_records(raw):
            try:
                _consume(state, payload)
            except RECORD_ERRORS as exc:
                skip_record(payload, exc)

        blocks: list[ContentBlock] = [TextBlock(text=state.text)] if state.text else []
        blocks.extend(state.tool_uses)
        if not blocks:
            return None
        return ParsedAssistantResult(
            message=CanonicalMessage(role="assistant", content=blocks),
            stop_reason=_resolve_stop_reason(state.finish, bool(state.tool_uses)),
            usage=state.usage,
        )


def _consume(state: _StreamState, payload: dict[str, Any]) -> None:
    metadata = payload.get("usageMetadata")
    if isinstance(metadata, dict):
        state.usage = TokenUsage(
            input_tokens=as_int(metadata.get("promptTokenCount")),
            output_tokens=as_int(metadata.get("candidatesTokenCount")),
        )

    candidate = _first_candidate(payload)
    if candidate is None:
        return
    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    for part in parts if isinstance(parts, list) else []:
        if not isinstance(part, dict) or part.get("thought") is True:
            continue
        if isinstance(part.get("text"), str):
            state.text += part["text"]
        call = part.get("functionCall") or part.get("function_call")
        if isinstance(call, dict):
            state.tool_uses.append(_tool_use(call, part, len(state.tool_uses)))

    if isinstance(candidate.get("finishReason"), str):
        state.finish = candidate["finishReason"]


def _first_candidate(payload: dict[str, Any]) -> dict[str, Any] | None:
    candidates = payload.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return None


def _tool_use(call: dict[str, Any], part: dict[str, Any], counter: int) -> ToolUseBlock:
    args = call.get("args")
    return ToolUseBlock(
        id=f"gemini_tc_{counter}",
        name=as_str(call.get("name")),
        input=copy.deepcopy(args) if isinstance(args, dict) else {},
        thoughtSignature=as_str(part.get("thoughtSignature")) or None,
    )


def _resolve_stop_reason(finish: str | None, had_tool_calls: bool) -> StopReason:
    if finish == "MAX_TOKENS":
        return "max_tokens"
    if finish in _BLOCKED_REASONS:
        logger.warning("Gemini blocked response: %s", finish)
        return "end_turn"
    if finish == "STOP" and had_tool_calls:
        return "tool_use"
    return "end_turn"
