"""Tests for the prompted tool-calling strategy."""

from agentwire.core.interface.ids import ToolUseIdFactory
from agentwire.core.interface.models import ToolDefinition
from agentwire.core.polyfills.strategy import PromptedStrategy

CALCULATOR = ToolDefinition(
    name="calculator",
    description="Evaluate a math expression",
    input_schema={"type": "object", "properties": {"expression": {"type": "string"}}},
)


class TestPromptedStrategy:
    def setup_method(self) -> None:
        self.strategy = PromptedStrategy()
        self.ids = ToolUseIdFactory()

    def test_prepare(self) -> None:
        prompt = self.strategy.prepare("You are helpful.", [CALCULATOR])
        assert prompt.startswith("You are helpful.")
        assert "calculator" in prompt

    def test_interpret_tool_call(self) -> None:
        message = {
            "id": "msg_1",
            "role": "assistant",
            "content": [
                {
                    "type": "text",
                    "text": 'Let me compute.\n<tool_call>{"name": "calculator", "arguments": {"expression": "2+2"}}</tool_call>',
                }
            ],
            "stop_reason": "end_turn",
        }
        result = self.strategy.interpret(message, self.ids)
        assert result["id"] == "msg_1"
        assert result["stop_reason"] == "tool_use"
        text, tool = result["content"]
        assert text == {"type": "text", "text": "Let me compute."}
        assert tool["type"] == "tool_use"
        assert tool["id"].startswith("toolu_cli_1_")
        assert tool["input"] == {"expression": "2+2"}
        assert message["content"][0]["type"] == "text"

    def test_interpret_plain_text(self) -> None:
        result = self.strategy.interpret(
            {"role": "assistant", "content": [{"type": "text", "text": "4"}], "stop_reason": "max_tokens"},
            self.ids,
        )
        assert result["content"] == [{"type": "text", "text": "4"}]
        assert result["stop_reason"] == "max_tokens"

    def test_interpret_defaults_to_end_turn(self) -> None:
        result = self.strategy.interpret({"content": [{"type": "text", "text": "hi"}]}, self.ids)
        assert result["stop_reason"] == "end_turn"

    def test_native_tool_use_passes_through(self) -> None:
        block = {"type": "tool_use", "id": "toolu_x", "name": "calculator", "input": {}}
        result = self.strategy.interpret({"content": [block, "junk"]}, self.ids)
        assert result["content"] == [block]
        assert result["stop_reason"] == "tool_use"
