"""OpenAI transpiler covering Chat Completions for OpenAI, Ollama and Gemini-compat.

Key differences from CMS:
- Tool results are separate ``role: "tool"`` messages, not user blocks.
- Assistant tool calls live in ``tool_calls`` with JSON-string arguments.
- Gemini's OpenAI-compatible endpoint rejects tool history, so it is
  rendered inline as text when ``inline_tool_history`` is set.
"""

import copy
import json
import logging
from collections.abc import Sequence
from typing import Any

from agentwire.core.interface.models import (
    CanonicalMessage,
    ContentBlock,
    ImageBlock,
    ImageSource,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

logger = logging.getLogger(__name__)


class OpenAITranspiler:
    """Converts between CMS and OpenAI's chat completion message format."""

    def __init__(self, *, inline_tool_history: bool = False) -> None:
        self.inline_tool_history = inline_tool_history

    def to_provider(self, messages: Sequence[CanonicalMessage]) -> list[dict[str, Any]]:
        """Convert CMS history to OpenAI ``messages`` (no system message)."""
        result: list[dict[str, Any]] = []
        for msg in messages:
            if msg.role == "user":
                result.extend(self._user_to_openai(msg))
            else:
                converted = self._assistant_to_openai(msg)
                if converted is not None:
                    result.append(converted)
        return result

    def from_provider(self, messages: Sequence[dict[str, Any]]) -> list[CanonicalMessage]:
        """Convert stored OpenAI messages back to CMS.

        ``tool`` messages become ``tool_result`` blocks in the preceding user
        message (or a new one), and a user message that directly follows
        them is folded into the same turn.
        """
        turns: list[tuple[str, list[ContentBlock]]] = []
        open_tool_turn = False
        for msg in messages:
            if not isinstance(msg, dict):
                logger.debug("Skipping non-object OpenAI message: %.200r", msg)
                continue
            role = msg.get("role")
            if role == "tool":
                block = ToolResultBlock(
                    tool_use_id=_str(msg.get("tool_call_id")),
                    content=msg.get("content"),
                )
                if turns and turns[-1][0] == "user":
                    turns[-1][1].append(block)
                else:
                    turns.append(("user", [block]))
                open_tool_turn = True
            elif role == "user":
                blocks = _user_content_from_openai(msg.get("content"))
                if open_tool_turn and turns and turns[-1][0] == "user":
                    turns[-1][1].extend(blocks)
                else:
                    turns.append(("user", blocks))
                open_tool_turn = False
            elif role == "assistant":
                turns.append(("assistant", _assistant_from_openai(msg)))
                open_tool_turn = False
            # system messages are carried separately, never as history
        return [CanonicalMessage(role=role, content=blocks) for role, blocks in turns]

    # ------------------------------------------------------------------
    # CMS -> OpenAI
    # ------------------------------------------------------------------

    def _user_to_openai(self, msg: CanonicalMessage) -> list[dict[str, Any]]:
        texts = [b.text for b in msg.content if isinstance(b, TextBlock)]
        results = msg.tool_results

        if results and self.inline_tool_history:
            parts = [f"[Tool result: {r.content}]" for r in results] + texts
            return [{"role": "user", "content": "\n".join(parts)}]

        out: list[dict[str, Any]] = [
            {"role": "tool", "tool_call_id": r.tool_use_id, "content": r.content}
            for r in results
        ]
        images = [b for b in msg.content if isinstance(b, ImageBlock)]
        if images and not self.inline_tool_history:
            parts_list: list[dict[str, Any]] = [
                {"type": "text", "text": text} for text in texts
            ]
            parts_list.extend(_image_to_openai(img) for img in images)
            out.append({"role": "user", "content": parts_list})
            return out

        text = "\n".join(t for t in texts if t)
        if text:
            out.append({"role": "user", "content": text})
        return out

    def _assistant_to_openai(self, msg: CanonicalMessage) -> dict[str, Any] | None:
        texts: list[str] = []
        tool_calls: list[dict[str, Any]] = []
        for block in msg.content:
            if isinstance(block, TextBlock):
                texts.append(block.text)
            elif isinstance(block, ToolUseBlock):
                if self.inline_tool_history:
                    texts.append(f"[Called tool: {block.name}({json.dumps(block.input)})]")
                else:
                    tool_calls.append(
                        {
                            "id": block.id,
                            "type": "function",
                            "function": {
                                "name": block.name,
                                "arguments": json.dumps(block.input),
                            },
                        }
                    )

        if not texts and not tool_calls:
            return None
        result: dict[str, Any] = {
            "role": "assistant",
            "content": "\n".join(texts) if texts else None,
        }
        if tool_calls:
            result["tool_calls"] = tool_calls
        return result


def _image_to_openai(image: ImageBlock) -> dict[str, Any]:
    url = f"data:{image.source.media_type};base64,{image.source.data}"
    return {"type": "image_url", "image_url": {"url": url}}


# ----------------------------------------------------------------------
# OpenAI -> CMS
# ----------------------------------------------------------------------


def _user_content_from_openai(content: Any) -> list[ContentBlock]:
    if isinstance(content, str):
        return [TextBlock(text=content)] if content else []
    if not isinstance(content, list):
        return []

    blocks: list[ContentBlock] = []
    for part in content:
        if not isinstance(part, dict):
            continue
        if part.get("type") == "text":
            blocks.append(TextBlock(text=_str(part.get("text"))))
        elif part.get("type") == "image_url":
            image_url = part.get("image_url")
            url = image_url.get("url") if isinstance(image_url, dict) else image_url
            image = _image_from_data_url(_str(url))
            if image is not None:
                blocks.append(image)
    return blocks


def _assistant_from_openai(msg: dict[str, Any]) -> list[ContentBlock]:
    blocks: list[ContentBlock] = []
    content = msg.get("content")
    if isinstance(content, list):
        text = "".join(
            _str(p.get("text")) for p in content if isinstance(p, dict) and p.get("type") == "text"
        )
    else:
        text = _str(content)
    if text:
        blocks.append(TextBlock(text=text))

    tool_calls = msg.get("tool_calls")
    for tc in tool_calls if isinstance(tool_calls, list) else []:
        if not isinstance(tc, dict):
            continue
        function = tc.get("function")
        if not isinstance(function, dict):
            function = {}
        blocks.append(
            ToolUseBlock(
                id=_str(tc.get("id")),
                name=_str(function.get("name")),
                input=parse_arguments(function.get("arguments")),
            )
        )
    return blocks


def _image_from_data_url(url: str) -> ImageBlock | None:
    if not url.startswith("data:") or ";base64," not in url:
        return None
    header, data = url[len("data:") :].split(";base64,", 1)
    return ImageBlock(source=ImageSource(media_type=header or "image/png", data=data))


def parse_arguments(raw: Any) -> dict[str, Any]:
    """Parse tool-call arguments; anything but a JSON object becomes ``{}``."""
    if isinstance(raw, dict):
        return copy.deepcopy(raw)
    try:
        result = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.debug("Unparseable tool arguments: %r", raw)
        return {}
    return result if isinstance(result, dict) else {}


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""
