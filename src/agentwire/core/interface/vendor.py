"""Explicit vendor selector.

Callers name the target wire format instead of letting it be inferred from
payload shape.
"""

from enum import Enum


class Vendor(str, Enum):
    """Backends whose wire formats agentwire can parse and emit."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OLLAMA = "ollama"
    GEMINI = "gemini"
    GEMINI_OPENAI = "gemini-openai"
    CLI = "cli"

    @property
    def family(self) -> str:
        """Stream format family: ``anthropic``, ``openai`` or ``gemini``."""
        if self in (Vendor.ANTHROPIC, Vendor.CLI):
            return "anthropic"
        if self is Vendor.GEMINI:
            return "gemini"
        return "openai"
