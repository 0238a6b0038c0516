"""Anthropic transpiler, the closest mapping since CMS uses Anthropic blocks.

Key differences from CMS:
- Internal fields (``turnId``, ``type``, caller metadata) must not be sent.
- Messages must strictly alternate between user and assistant roles.
- Stored histories may carry string content or list-shaped tool results.
"""

import copy
from collections.abc import Sequence
from typing import Any

from agentwire.core.interface.models import (
    CanonicalMessage,
    ContentBlock,
    ImageBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)


class AnthropicTranspiler:
    """Converts between CMS and Anthropic's messages API format."""

    def to_provider(self, messages: Sequence[CanonicalMessage]) -> list[dict[str, Any]]:
        """Convert CMS history to Anthropic ``messages``.

        Consecutive same-role messages are merged.
        """
        raw = [
            {"role": msg.role, "content": [_block_to_anthropic(b) for b in msg.content]}
            for msg in messages
            if msg.content
        ]
        return merge_consecutive_roles(raw, key="content")

    def from_provider(self, messages: Sequence[dict[str, Any]]) -> list[CanonicalMessage]:
        """Convert stored Anthropic messages back to CMS."""
        result: list[CanonicalMessage] = []
        for msg in messages:
            role = msg.get("role") if isinstance(msg, dict) else None
            if role not in ("user", "assistant"):
                continue
            content = msg.get("content")
            if isinstance(content, str):
                result.append(CanonicalMessage(role=role, content=content))
                continue
            raw_blocks = content if isinstance(content, list) else []
            blocks = [b for b in (_block_from_anthropic(raw) for raw in raw_blocks) if b]
            result.append(CanonicalMessage(role=role, content=blocks))
        return result


def _block_to_anthropic(block: ContentBlock) -> dict[str, Any]:
    if isinstance(block, TextBlock):
        return {"type": "text", "text": block.text}
    if isinstance(block, ToolUseBlock):
        return {
            "type": "tool_use",
            "id": block.id,
            "name": block.name,
            "input": copy.deepcopy(block.input),
        }
    if isinstance(block, ToolResultBlock):
        result: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": block.tool_use_id,
            "content": block.content,
        }
        if block.is_error:
            result["is_error"] = True
        return result
    image: ImageBlock = block
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": image.source.media_type,
            "data": image.source.data,
        },
    }


def _block_from_anthropic(raw: Any) -> ContentBlock | None:
    if not isinstance(raw, dict):
        return None
    kind = raw.get("type")
    if kind == "text":
        return TextBlock(text=_str(raw.get("text")))
    if kind == "tool_use":
        signature = raw.get("thoughtSignature")
        return ToolUseBlock(
            id=_str(raw.get("id")),
            name=_str(raw.get("name")),
            input=copy.deepcopy(raw.get("input", {})),
            thoughtSignature=signature if isinstance(signature, str) else None,
        )
    if kind == "tool_result":
        return ToolResultBlock(
            tool_use_id=_str(raw.get("tool_use_id")),
            content=raw.get("content"),
            is_error=bool(raw.get("is_error", False)),
        )
    source = raw.get("source")
    if (
        kind == "image"
        and isinstance(source, dict)
        and source.get("type") == "base64"
        and isinstance(source.get("data"), str)
        and isinstance(source.get("media_type", ""), str)
    ):
        return ImageBlock.model_validate(raw)
    return None


def merge_consecutive_roles(
    messages: list[dict[str, Any]], *, key: str
) -> list[dict[str, Any]]:
    """Merge consecutive messages with the same role by concatenating ``key``.

    Anthropic and Gemini both require strict user/assistant alternation.
    """
    merged: list[dict[str, Any]] = []
    for msg in messages:
        if merged and merged[-1]["role"] == msg["role"]:
            merged[-1][key].extend(msg[key])
        else:
            merged.append(msg)
    return merged


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""
