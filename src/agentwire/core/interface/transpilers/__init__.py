"""Vendor-specific transpiler implementations."""

from agentwire.core.interface.transpiler import Transpiler
from agentwire.core.interface.transpilers.anthropic import AnthropicTranspiler
from agentwire.core.interface.transpilers.gemini import GeminiTranspiler
from agentwire.core.interface.transpilers.openai import OpenAITranspiler
from agentwire.core.interface.vendor import Vendor


def get_transpiler(vendor: Vendor | str) -> Transpiler:
    """Return the transpiler for *vendor*."""
    vendor = Vendor(vendor)
    if vendor is Vendor.GEMINI:
        return GeminiTranspiler()
    if vendor is Vendor.GEMINI_OPENAI:
        return OpenAITranspiler(inline_tool_history=True)
    if vendor.family == "openai":
        return OpenAITranspiler()
    return AnthropicTranspiler()


__all__ = [
    "AnthropicTranspiler",
    "GeminiTranspiler",
    "OpenAITranspiler",
    "get_transpiler",
]
