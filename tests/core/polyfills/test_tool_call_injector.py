"""Tests for tool-call prompt injection."""

from agentwire.core.interface.models import ToolDefinition
from agentwire.core.polyfills.tool_call_injector import (
    TOOL_CALL_FORMAT_INSTRUCTIONS,
    ToolCallInjector,
    serialize_tools,
)

SEARCH = ToolDefinition(
    name="search",
    description="Search the web",
    input_schema={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search terms"},
            "mode": {"type": "string", "enum": ["fast", "deep"]},
        },
        "required": ["query"],
    },
)
PING = ToolDefinition(name="ping", description="Check liveness")


class TestSerializeTools:
    def test_empty(self) -> None:
        assert serialize_tools([]) == ""

    def test_catalog(self) -> None:
        catalog = serialize_tools([SEARCH, PING])
        lines = catalog.strip().splitlines()
        assert lines[0] == "Available tools:"
        assert lines[1] == "- search: Search the web Required: query."
        assert lines[2] == "  params: query (string) - Search terms; mode (string) [fast|deep]"
        assert lines[3] == "- ping: Check liveness"


class TestToolCallInjector:
    def test_system_prompt_prefix(self) -> None:
        prompt = ToolCallInjector().build_system_prompt("You are terse.", [SEARCH])
        assert prompt.startswith("You are terse." + TOOL_CALL_FORMAT_INSTRUCTIONS)
        assert "- search:" in prompt

    def test_no_system_no_tools(self) -> None:
        prompt = ToolCallInjector().build_system_prompt(None)
        assert prompt == TOOL_CALL_FORMAT_INSTRUCTIONS
        assert "<tool_call>" in prompt
        assert "\\u{XXXX}" in prompt
