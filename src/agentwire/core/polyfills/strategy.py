"""Prompted tool calling, turning marker text into ``tool_use`` blocks.

``PromptedStrategy`` is the prepare/interpret pair for a backend that only
produces text: ``prepare`` composes the system prompt with the tool-call
format instructions, and ``interpret`` rewrites a raw assistant message so
every recovered call becomes a ``tool_use`` block with a generated id.
"""

from collections.abc import Sequence
from typing import Any

from agentwire.core.interface.ids import ToolUseIdFactory
from agentwire.core.interface.models import ToolDefinition
from agentwire.core.polyfills.tool_call_injector import ToolCallInjector
from agentwire.core.polyfills.tool_call_parser import ToolCallParser


class PromptedStrategy:
    """Tool-call prompt injection and recovery for text-only backends."""

    def __init__(self) -> None:
        self._injector = ToolCallInjector()
        self._parser = ToolCallParser()

    def prepare(self, system: str | None, tools: Sequence[ToolDefinition] = ()) -> str:
        """Return the composed system prompt."""
        return self._injector.build_system_prompt(system, tools)

    def interpret(
        self, message: dict[str, Any], ids: ToolUseIdFactory
    ) -> dict[str, Any]:
        """Return a copy of *message* with tool-call markers parsed out.

        Non-text blocks pass through unchanged. ``stop_reason`` becomes
        ``tool_use`` when the result holds any ``tool_use`` block, else the
        message's own stop reason, else ``end_turn``.
        """
        content: list[dict[str, Any]] = []
        has_tool_use = False

        for block in message.get("content") or []:
            if not isinstance(block, dict):
                continue
            if block.get("type") == "text" and isinstance(block.get("text"), str):
                parsed = self._parser.parse(block["text"])
                content.extend({"type": "text", "text": t} for t in parsed.text_parts)
                for call in parsed.tool_calls:
                    has_tool_use = True
                    content.append(
                        {
                            "type": "tool_use",
                            "id": ids.next_id(),
                            "name": call.name,
                            "input": call.arguments,
                        }
                    )
            else:
                content.append(block)
                if block.get("type") == "tool_use":
                    has_tool_use = True

        stop_reason = "tool_use" if has_tool_use else (message.get("stop_reason") or "end_turn")
        return {**message, "content": content, "stop_reason": stop_reason}
