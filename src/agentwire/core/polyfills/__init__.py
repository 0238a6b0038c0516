"""Polyfills for backends that lack native tool calling."""

from agentwire.core.polyfills.strategy import PromptedStrategy
from agentwire.core.polyfills.tool_call_injector import ToolCallInjector
from agentwire.core.polyfills.tool_call_parser import (
    ToolCallParser,
    ToolCallParseResult,
    extract_tool_calls,
)

__all__ = [
    "PromptedStrategy",
    "ToolCallInjector",
    "ToolCallParseResult",
    "ToolCallParser",
    "extract_tool_calls",
]
