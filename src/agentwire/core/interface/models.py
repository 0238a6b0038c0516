"""Canonical Message Schema (CMS), the vendor-neutral stored message format.

Every stream parser produces these models and every transpiler consumes
them. Content blocks follow the Anthropic block shapes (``text``,
``tool_use``, ``tool_result``, ``image``) because that is the shape the
rest of the system persists and replays.
"""

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

StopReason = Literal["end_turn", "tool_use", "max_tokens"]

# ---------------------------------------------------------------------------
# Content Blocks
# ---------------------------------------------------------------------------


class TextBlock(BaseModel):
    """Plain text content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    """A tool invocation emitted by the assistant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Any = Field(default_factory=dict)
    thought_signature: str | None = Field(default=None, alias="thoughtSignature")


class ToolResultBlock(BaseModel):
    """The result of a tool call, sent back in a user message."""

    model_config = ConfigDict(frozen=True)

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: str = ""
    is_error: bool = False

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return "".join(
                str(item.get("text", "")) for item in value if isinstance(item, dict)
            )
        return json.dumps(value)


class ImageSource(BaseModel):
    """Inline base64 image payload."""

    model_config = ConfigDict(frozen=True)

    type: Literal["base64"] = "base64"
    media_type: str = "image/png"
    data: str


class ImageBlock(BaseModel):
    """Image content block (user messages only)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    source: ImageSource


ContentBlock = Annotated[
    TextBlock | ToolUseBlock | ToolResultBlock | ImageBlock,
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Canonical Message
# ---------------------------------------------------------------------------


class CanonicalMessage(BaseModel):
    """One stored conversation turn.

    ``turn_id`` groups every message of one request/response exchange and
    ``type`` carries caller annotations such as ``"intervention"``. Neither
    field, nor any extra caller metadata, ever reaches a vendor payload:
    transpilers copy only the fields they know about.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    role: Literal["user", "assistant"]
    content: list[ContentBlock] = []
    turn_id: str | None = Field(default=None, alias="turnId")
    type: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_string_content(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [{"type": "text", "text": value}] if value else []
        return value

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "".join(b.text for b in self.content if isinstance(b, TextBlock))

    @property
    def tool_uses(self) -> list[ToolUseBlock]:
        return [b for b in self.content if isinstance(b, ToolUseBlock)]

    @property
    def tool_results(self) -> list[ToolResultBlock]:
        return [b for b in self.content if isinstance(b, ToolResultBlock)]

    @classmethod
    def user(cls, text: str, **metadata: Any) -> "CanonicalMessage":
        """Create a user message with a single text block."""
        return cls(role="user", content=[TextBlock(text=text)], **metadata)

    @classmethod
    def assistant(
        cls,
        text: str = "",
        tool_uses: list[ToolUseBlock] | None = None,
        **metadata: Any,
    ) -> "CanonicalMessage":
        """Create an assistant message; text (if any) precedes tool calls."""
        content: list[ContentBlock] = [TextBlock(text=text)] if text else []
        content.extend(tool_uses or [])
        return cls(role="assistant", content=content, **metadata)

    def to_storage(self) -> dict[str, Any]:
        """Serialize for history storage, metadata included."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Parse results and helpers
# ---------------------------------------------------------------------------


class TokenUsage(BaseModel):
    """Token counts reported by a vendor stream."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


class ParsedAssistantResult(BaseModel):
    """A fully assembled assistant turn plus its normalized stop reason."""

    message: CanonicalMessage
    stop_reason: StopReason
    usage: TokenUsage | None = None


class ToolCallSite(BaseModel):
    """A tool call recovered from free-form text, before it gets an id."""

    name: str
    arguments: dict[str, Any] = {}


class ToolDefinition(BaseModel):
    """A tool catalog entry (Anthropic ``tools`` shape)."""

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object"}
    )
