"""OpenAI Chat Completions stream parser (OpenAI, Ollama, Gemini-compat)."""

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
from agentwire.core.interface.transpilers.openai import parse_arguments
from agentwire.core.streaming.parsers.base import (
    RECORD_ERRORS,
    as_int,
    as_str,
    iter_json_records,
    skip_record,
)

FINISH_REASONS: dict[str, StopReason] = {
    "tool_calls": "tool_use",
    "stop": "end_turn",
    "length": "max_tokens",
}


@dataclass
class _PendingToolCall:
    id: str
    name: str = ""
    arguments: str = ""


@dataclass
class _StreamState:
    text: str = ""
    calls: dict[int, _PendingToolCall] = field(default_factory=dict)
    stop_reason: StopReason = "end_turn"
    usage: TokenUsage | None = None


class OpenAIStreamParser:
    """Accumulates ``choices[0].delta`` fragments.

    Tool-call fragments are keyed by their ``index`` and concatenated, so an
    argument string split across any number of chunks reassembles exactly.
    """

    def parse(self, raw: str) -> ParsedAssistantResult | None:
        state = _StreamState()
        for _, payload in iter_json_records(raw):
            try:
                _consume(state, payload)
            except RECORD_ERRORS as exc:
                skip_record(payload, exc)

        content: list[ContentBlock] = []
        if state.text:
            content.append(TextBlock(text=state.text))
        for index in sorted(state.calls):
            call = state.calls[index]
            content.append(
                ToolUseBlock(
                    id=call.id,
                    name=call.name,
                    input=parse_arguments(call.arguments) if call.arguments else {},
                )
            )

        if not content:
            return None
        return ParsedAssistantResult(
            message=CanonicalMessage(role="assistant", content=content),
            stop_reason=state.stop_reason,
            usage=state.usage,
        )


def _consume(state: _StreamState, payload: dict[str, Any]) -> None:
    if isinstance(payload.get("usage"), dict):
        state.usage = TokenUsage(
            input_tokens=as_int(payload["usage"].get("prompt_tokens")),
            output_tokens=as_int(payload["usage"].get("completion_tokens")),
        )

    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return
    choice = choices[0]

    delta = choice.get("delta")
    if isinstance(delta, dict):
        if isinstance(delta.get("content"), str):
            state.text += delta["content"]
        fragments = delta.get("tool_calls")
        for fragment in fragments if isinstance(fragments, list) else []:
            _apply_tool_fragment(state.calls, fragment)

    finish = choice.get("finish_reason")
    if isinstance(finish, str) and finish in FINISH_REASONS:
        state.stop_reason = FINISH_REASONS[finish]


def _apply_tool_fragment(calls: dict[int, _PendingToolCall], fragment: Any) -> None:
    if not isinstance(fragment, dict):
        return
    index = fragment.get("index", 0)
    if not isinstance(index, int) or isinstance(index, bool):
        return
    function = fragment.get("function")
    if not isinstance(function, dict):
        function = {}
    fragment_id = as_str(fragment.get("id"))

    call = calls.get(index)
    if call is None:
        call = calls[index] = _PendingToolCall(id=fragment_id or f"tool_{index}")
    elif fragment_id and call.id == f"tool_{index}":
        call.id = fragment_id
    if as_str(function.get("name")):
        call.name = function["name"]
    if isinstance(function.get("arguments"), str):
        call.arguments += function["arguments"]
