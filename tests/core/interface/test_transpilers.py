"""Tests for vendor-specific transpilers."""

import json

from agentwire.core.interface.models import (
    CanonicalMessage,
    ImageBlock,
    ImageSource,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from agentwire.core.interface.transpilers import get_transpiler
from agentwire.core.interface.transpilers.anthropic import AnthropicTranspiler
from agentwire.core.interface.transpilers.gemini import GeminiTranspiler
from agentwire.core.interface.transpilers.openai import OpenAITranspiler
from agentwire.core.interface.vendor import Vendor

# ---------------------------------------------------------------------------
# Fixtures: sample conversations
# ---------------------------------------------------------------------------


def _tool_history() -> list[CanonicalMessage]:
    return [
        CanonicalMessage.user("What is 2+2?", turnId="t-1"),
        CanonicalMessage(
            role="assistant",
            content=[
                TextBlock(text="Let me calculate."),
                ToolUseBlock(id="call-1", name="calculator", input={"expression": "2+2"}),
            ],
            turnId="t-1",
        ),
        CanonicalMessage(
            role="user",
            content=[ToolResultBlock(tool_use_id="call-1", content="4")],
            turnId="t-1",
            type="intervention",
        ),
        CanonicalMessage.assistant("The answer is 4.", turnId="t-1"),
    ]


# ---------------------------------------------------------------------------
# Anthropic
# ---------------------------------------------------------------------------


class TestAnthropicTranspiler:
    def setup_method(self) -> None:
        self.t = AnthropicTranspiler()

    def test_strips_metadata(self) -> None:
        messages = self.t.to_provider(_tool_history())
        for msg in messages:
            assert set(msg) == {"role", "content"}
        assert messages[2]["content"] == [
            {"type": "tool_result", "tool_use_id": "call-1", "content": "4"}
        ]

    def test_input_is_copied(self) -> None:
        history = _tool_history()
        messages = self.t.to_provider(history)
        messages[1]["content"][1]["input"]["expression"] = "mutated"
        assert history[1].content[1].input == {"expression": "2+2"}

    def test_merges_consecutive_roles(self) -> None:
        history = [CanonicalMessage.user("one"), CanonicalMessage.user("two")]
        messages = self.t.to_provider(history)
        assert len(messages) == 1
        assert [b["text"] for b in messages[0]["content"]] == ["one", "two"]

    def test_from_provider_string_and_list_content(self) -> None:
        result = self.t.from_provider(
            [
                {"role": "user", "content": "hi"},
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": "x",
                            "content": [{"type": "text", "text": "done"}],
                            "is_error": True,
                        }
                    ],
                },
            ]
        )
        assert result[0].text == "hi"
        assert result[1].tool_results[0].content == "done"
        assert result[1].tool_results[0].is_error is True

    def test_from_provider_tolerates_bad_entries(self) -> None:
        restored = self.t.from_provider(
            [
                "not a message",
                {"role": "assistant", "content": None},
                {
                    "role": "assistant",
                    "content": [
                        {"type": "text", "text": 3},
                        {"type": "tool_use", "id": 1, "name": "f", "thoughtSignature": 9},
                        {"type": "image", "source": {"type": "base64", "data": None}},
                    ],
                },
            ]
        )
        assert [m.content for m in restored] == [
            [],
            [TextBlock(text=""), ToolUseBlock(id="", name="f")],
        ]

    def test_error_flag_projected(self) -> None:
        msg = CanonicalMessage(
            role="user", content=[ToolResultBlock(tool_use_id="x", content="boom", is_error=True)]
        )
        assert self.t.to_provider([msg])[0]["content"][0]["is_error"] is True


# ---------------------------------------------------------------------------
# OpenAI
# ---------------------------------------------------------------------------


class TestOpenAITranspiler:
    def setup_method(self) -> None:
        self.t = OpenAITranspiler()

    def test_tool_history(self) -> None:
        messages = self.t.to_provider(_tool_history())
        assert messages[0] == {"role": "user", "content": "What is 2+2?"}

        assistant = messages[1]
        assert assistant["content"] == "Let me calculate."
        call = assistant["tool_calls"][0]
        assert call["id"] == "call-1"
        assert call["type"] == "function"
        assert json.loads(call["function"]["arguments"]) == {"expression": "2+2"}

        assert messages[2] == {"role": "tool", "tool_call_id": "call-1", "content": "4"}
        assert messages[3] == {"role": "assistant", "content": "The answer is 4."}

    def test_assistant_without_text_has_null_content(self) -> None:
        msg = CanonicalMessage.assistant(tool_uses=[ToolUseBlock(id="a", name="ping")])
        assert self.t.to_provider([msg])[0]["content"] is None

    def test_empty_assistant_skipped(self) -> None:
        history = [CanonicalMessage(role="assistant", content=[]), CanonicalMessage.user("hi")]
        assert self.t.to_provider(history) == [{"role": "user", "content": "hi"}]

    def test_from_provider_tolerates_bad_entries(self) -> None:
        restored = self.t.from_provider(
            [
                42,
                {"role": "user", "content": [{"type": "image_url", "image_url": "nope"}, {"type": "text", "text": "hi"}]},
                {"role": "user", "content": {"text": "dict content"}},
                {
                    "role": "assistant",
                    "content": 7,
                    "tool_calls": ["bad", {"id": "c1", "function": "oops"}, {"id": 5, "function": {"name": "f"}}],
                },
                {"role": "assistant", "tool_calls": 3},
                {"role": "tool", "tool_call_id": None, "content": "r"},
            ]
        )
        assert restored[0].text == "hi"
        assert restored[1].content == []
        assert [(t.id, t.name, t.input) for t in restored[2].tool_uses] == [("c1", "", {}), ("", "f", {})]
        assert restored[3].content == []
        assert restored[4].tool_results[0].tool_use_id == ""

    def test_tool_results_then_user_text(self) -> None:
        msg = CanonicalMessage(
            role="user",
            content=[
                ToolResultBlock(tool_use_id="a", content="1"),
                ToolResultBlock(tool_use_id="b", content="2"),
                TextBlock(text="continue"),
            ],
        )
        messages = self.t.to_provider([msg])
        assert [m["role"] for m in messages] == ["tool", "tool", "user"]
        assert messages[2]["content"] == "continue"

    def test_text_blocks_joined_with_newline(self) -> None:
        msg = CanonicalMessage(role="user", content=[TextBlock(text="a"), TextBlock(text="b")])
        assert self.t.to_provider([msg])[0]["content"] == "a\nb"

    def test_image_becomes_data_url(self) -> None:
        msg = CanonicalMessage(
            role="user",
            content=[
                TextBlock(text="look"),
                ImageBlock(source=ImageSource(media_type="image/png", data="AAA=")),
            ],
        )
        content = self.t.to_provider([msg])[0]["content"]
        assert content[1] == {
            "type": "image_url",
            "image_url": {"url": "data:image/png;base64,AAA="},
        }

    def test_inline_tool_history(self) -> None:
        t = OpenAITranspiler(inline_tool_history=True)
        messages = t.to_provider(_tool_history())
        assert "tool_calls" not in messages[1]
        assert messages[1]["content"] == (
            'Let me calculate.\n[Called tool: calculator({"expression": "2+2"})]'
        )
        assert messages[2] == {"role": "user", "content": "[Tool result: 4]"}

    def test_round_trip_preserves_tools(self) -> None:
        original = CanonicalMessage(
            role="assistant",
            content=[
                TextBlock(text="Searching"),
                ToolUseBlock(id="c1", name="search", input={"query": "cats", "limit": 3}),
            ],
        )
        restored = self.t.from_provider(self.t.to_provider([original]))
        assert len(restored) == 1
        assert restored[0].text == "Searching"
        tool = restored[0].tool_uses[0]
        assert tool.name == "search"
        assert tool.input == {"query": "cats", "limit": 3}

    def test_from_provider_merges_tool_messages(self) -> None:
        result = self.t.from_provider(
            [
                {"role": "system", "content": "be nice"},
                {"role": "user", "content": "go"},
                {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {"id": "c1", "type": "function", "function": {"name": "a", "arguments": "{}"}},
                        {"id": "c2", "type": "function", "function": {"name": "b", "arguments": "nope"}},
                    ],
                },
                {"role": "tool", "tool_call_id": "c1", "content": "r1"},
                {"role": "tool", "tool_call_id": "c2", "content": "r2"},
                {"role": "user", "content": "thanks"},
            ]
        )
        assert [m.role for m in result] == ["user", "assistant", "user"]
        assert result[1].tool_uses[1].input == {}
        last = result[2]
        assert [r.tool_use_id for r in last.tool_results] == ["c1", "c2"]
        assert last.text == "thanks"

    def test_from_provider_tool_without_preceding_user(self) -> None:
        result = self.t.from_provider(
            [
                {"role": "assistant", "content": "x"},
                {"role": "tool", "tool_call_id": "c1", "content": "r"},
            ]
        )
        assert result[1].role == "user"
        assert result[1].tool_results[0].content == "r"


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------


class TestGeminiTranspiler:
    def setup_method(self) -> None:
        self.t = GeminiTranspiler()

    def test_tool_history(self) -> None:
        contents = self.t.to_provider(_tool_history())
        assert [c["role"] for c in contents] == ["user", "model", "user", "model"]
        assert contents[1]["parts"][1] == {
            "functionCall": {"name": "calculator", "args": {"expression": "2+2"}}
        }
        assert contents[2]["parts"][0] == {
            "functionResponse": {"name": "calculator", "response": {"result": "4"}}
        }

    def test_json_object_result_passed_as_response(self) -> None:
        history = _tool_history()[:2] + [
            CanonicalMessage(
                role="user", content=[ToolResultBlock(tool_use_id="call-1", content='{"value": 4}')]
            )
        ]
        response = self.t.to_provider(history)[2]["parts"][0]["functionResponse"]["response"]
        assert response == {"value": 4}

    def test_error_result(self) -> None:
        history = _tool_history()[:2] + [
            CanonicalMessage(
                role="user",
                content=[ToolResultBlock(tool_use_id="call-1", content="bad", is_error=True)],
            )
        ]
        response = self.t.to_provider(history)[2]["parts"][0]["functionResponse"]["response"]
        assert response == {"error": "bad"}

    def test_unknown_name_fallback(self) -> None:
        history = [
            CanonicalMessage(role="user", content=[ToolResultBlock(tool_use_id="ghost", content="x")])
        ]
        part = self.t.to_provider(history)[0]["parts"][0]
        assert part["functionResponse"]["name"] == "unknown"

    def test_name_map_reset_each_assistant_turn(self) -> None:
        history = [
            CanonicalMessage.assistant(tool_uses=[ToolUseBlock(id="old", name="first")]),
            CanonicalMessage.assistant("no tools this time"),
            CanonicalMessage(role="user", content=[ToolResultBlock(tool_use_id="old", content="x")]),
        ]
        contents = self.t.to_provider(history)
        assert contents[-1]["parts"][0]["functionResponse"]["name"] == "unknown"

    def test_merges_same_role(self) -> None:
        history = [CanonicalMessage.user("a"), CanonicalMessage.user("b")]
        contents = self.t.to_provider(history)
        assert contents == [{"role": "user", "parts": [{"text": "a"}, {"text": "b"}]}]

    def test_thought_signature_passthrough(self) -> None:
        msg = CanonicalMessage.assistant(
            tool_uses=[ToolUseBlock(id="g", name="f", thoughtSignature="sig")]
        )
        part = self.t.to_provider([msg])[0]["parts"][0]
        assert part["thoughtSignature"] == "sig"

    def test_round_trip_regenerates_ids(self) -> None:
        restored = self.t.from_provider(self.t.to_provider(_tool_history()))
        assert [m.role for m in restored] == ["user", "assistant", "user", "assistant"]
        tool = restored[1].tool_uses[0]
        assert tool.name == "calculator"
        assert tool.input == {"expression": "2+2"}
        assert tool.id != "call-1"
        result = restored[2].tool_results[0]
        assert result.tool_use_id == tool.id
        assert result.content == "4"

    def test_from_provider_skips_thoughts(self) -> None:
        restored = self.t.from_provider(
            [{"role": "model", "parts": [{"text": "hmm", "thought": True}, {"text": "answer"}]}]
        )
        assert restored[0].text == "answer"

    def test_from_provider_tolerates_bad_entries(self) -> None:
        restored = self.t.from_provider(
            [
                None,
                {"role": "model", "parts": None},
                {
                    "role": "model",
                    "parts": [
                        {"functionCall": "search"},
                        {"functionCall": {"name": 4, "args": [1]}, "thoughtSignature": 1},
                        {"inlineData": {"data": None}},
                    ],
                },
                {"role": "user", "parts": [{"functionResponse": {"name": None, "response": "done"}}]},
            ]
        )
        assert restored[0].role == "assistant"
        assert restored[0].content == []
        (tool,) = restored[1].tool_uses
        assert (tool.name, tool.input, tool.thought_signature) == ("unknown", {}, None)
        assert restored[2].tool_results[0].tool_use_id == tool.id
        assert restored[2].tool_results[0].content == "done"


class TestGetTranspiler:
    def test_dispatch(self) -> None:
        assert isinstance(get_transpiler(Vendor.ANTHROPIC), AnthropicTranspiler)
        assert isinstance(get_transpiler("cli"), AnthropicTranspiler)
        assert isinstance(get_transpiler(Vendor.OLLAMA), OpenAITranspiler)
        assert isinstance(get_transpiler(Vendor.GEMINI), GeminiTranspiler)

    def test_gemini_openai_inlines_tools(self) -> None:
        t = get_transpiler(Vendor.GEMINI_OPENAI)
        assert isinstance(t, OpenAITranspiler)
        assert t.inline_tool_history is True
