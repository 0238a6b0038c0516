"""Gemini transpiler, mapping assistant->model and tool blocks to function parts.

Key differences from CMS:
- Role "assistant" becomes "model".
- Tool calls use ``functionCall`` parts; results use ``functionResponse``
  parts addressed by function *name*, not by id.
- Consecutive same-role contents are rejected by the API and get merged.
"""

import copy
import json
import logging
from collections.abc import Sequence
from typing import Any

from agentwire.core.interface.ids import ToolUseIdFactory
from agentwire.core.interface.models import (
    CanonicalMessage,
    ContentBlock,
    ImageBlock,
    ImageSource,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from agentwire.core.interface.transpilers.anthropic import merge_consecutive_roles

logger = logging.getLogger(__name__)

UNKNOWN_FUNCTION = "unknown"


class GeminiTranspiler:
    """Converts between CMS and Gemini's ``contents`` format."""

    def to_provider(self, messages: Sequence[CanonicalMessage]) -> list[dict[str, Any]]:
        """Convert CMS history to Gemini ``contents``.

        ``functionResponse.name`` is looked up from the tool calls of the most
        recent assistant turn and falls back to ``"unknown"``.
        """
        contents: list[dict[str, Any]] = []
        last_tool_uses: dict[str, str] = {}

        for msg in messages:
            parts: list[dict[str, Any]] = []
            if msg.role == "assistant":
                last_tool_uses = {}
                for block in msg.content:
                    if isinstance(block, TextBlock):
                        parts.append({"text": block.text})
                    elif isinstance(block, ToolUseBlock):
                        last_tool_uses[block.id] = block.name
                        part: dict[str, Any] = {
                            "functionCall": {
                                "name": block.name,
                                "args": copy.deepcopy(block.input),
                            }
                        }
                        if block.thought_signature:
                            part["thoughtSignature"] = block.thought_signature
                        parts.append(part)
            else:
                for block in msg.content:
                    if isinstance(block, TextBlock):
                        parts.append({"text": block.text})
                    elif isinstance(block, ToolResultBlock):
                        name = last_tool_uses.get(block.tool_use_id, UNKNOWN_FUNCTION)
                        parts.append(
                            {
                                "functionResponse": {
                                    "name": name,
                                    "response": _function_response(block),
                                }
                            }
                        )
                    elif isinstance(block, ImageBlock):
                        parts.append(
                            {
                                "inlineData": {
                                    "mimeType": block.source.media_type,
                                    "data": block.source.data,
                                }
                            }
                        )

            if parts:
                role = "model" if msg.role == "assistant" else "user"
                contents.append({"role": role, "parts": parts})

        return merge_consecutive_roles(contents, key="parts")

    def from_provider(self, messages: Sequence[dict[str, Any]]) -> list[CanonicalMessage]:
        """Convert stored Gemini contents back to CMS.

        Tool-use ids are regenerated; each ``functionResponse`` is paired
        with the latest generated id for the same function name.
        """
        ids = ToolUseIdFactory(prefix="gemini_tc")
        ids_by_name: dict[str, str] = {}
        result: list[CanonicalMessage] = []

        for content in messages:
            if not isinstance(content, dict):
                logger.debug("Skipping non-object Gemini content: %.200r", content)
                continue
            role = "assistant" if content.get("role") == "model" else "user"
            parts = content.get("parts")
            blocks: list[ContentBlock] = []
            for part in parts if isinstance(parts, list) else []:
                if not isinstance(part, dict) or part.get("thought") is True:
                    continue
                call = part.get("functionCall") or part.get("function_call")
                response = part.get("functionResponse") or part.get("function_response")
                inline = part.get("inlineData") or part.get("inline_data")
                if isinstance(part.get("text"), str):
                    blocks.append(TextBlock(text=part["text"]))
                elif isinstance(call, dict):
                    tool_id = ids.next_id()
                    name = _function_name(call)
                    ids_by_name[name] = tool_id
                    args = call.get("args")
                    signature = part.get("thoughtSignature")
                    blocks.append(
                        ToolUseBlock(
                            id=tool_id,
                            name=name,
                            input=copy.deepcopy(args) if isinstance(args, dict) else {},
                            thoughtSignature=signature if isinstance(signature, str) else None,
                        )
                    )
                elif isinstance(response, dict):
                    blocks.append(
                        _tool_result_from_response(
                            ids_by_name.get(_function_name(response), UNKNOWN_FUNCTION),
                            response.get("response"),
                        )
                    )
                elif isinstance(inline, dict) and isinstance(inline.get("data"), str):
                    mime_type = inline.get("mimeType") or inline.get("mime_type")
                    blocks.append(
                        ImageBlock(
                            source=ImageSource(
                                media_type=mime_type if isinstance(mime_type, str) else "image/png",
                                data=inline["data"],
                            )
                        )
                    )
            result.append(CanonicalMessage(role=role, content=blocks))
        return result


def _function_name(call: dict[str, Any]) -> str:
    name = call.get("name")
    return name if isinstance(name, str) and name else UNKNOWN_FUNCTION


def _function_response(block: ToolResultBlock) -> dict[str, Any]:
    if block.is_error:
        return {"error": block.content}
    try:
        parsed = json.loads(block.content)
    except json.JSONDecodeError:
        return {"result": block.content}
    if isinstance(parsed, dict):
        return parsed
    return {"result": block.content}


def _tool_result_from_response(tool_use_id: str, response: Any) -> ToolResultBlock:
    if isinstance(response, dict) and len(response) == 1:
        if isinstance(response.get("result"), str):
            return ToolResultBlock(tool_use_id=tool_use_id, content=response["result"])
        if isinstance(response.get("error"), str):
            return ToolResultBlock(
                tool_use_id=tool_use_id, content=response["error"], is_error=True
            )
    return ToolResultBlock(tool_use_id=tool_use_id, content=response)
