"""In-band tool-call extractor, recovering tool calls from free-form text.

Backends without native tool calling are asked to emit
``<tool_call>{"name": ..., "arguments": {...}}</tool_call>`` markers. This
module turns such text back into text parts plus :class:`ToolCallSite`
values.
"""

import json
import logging
import re
from dataclasses import dataclass, field

from agentwire.core.interface.models import ToolCallSite

logger = logging.getLogger(__name__)

_TOOL_RESULT_RE = re.compile(r"<tool_result>\s*.*?\s*</tool_result>", re.DOTALL)
_TOOL_CALL_RE = re.compile(r"<tool_call>\s*(.*?)\s*</tool_call>", re.DOTALL)
# \u{1F600}-style code point escapes: valid in JS source, invalid in JSON.
_CODE_POINT_ESCAPE_RE = re.compile(r"\\u\{([0-9a-fA-F]+)\}")


@dataclass
class ToolCallParseResult:
    """Text surrounding the markers and the tool calls recovered from them."""

    text_parts: list[str] = field(default_factory=list)
    tool_calls: list[ToolCallSite] = field(default_factory=list)


class ToolCallParser:
    """Extracts ``<tool_call>`` markers from model output."""

    def parse(self, text: str) -> ToolCallParseResult:
        """Parse *text* for tool-call markers.

        Hallucinated ``<tool_result>`` spans are removed first. A marker whose
        body does not decode to a JSON object stays in the output as plain
        text. Text after the last marker is kept only when no tool call was
        recovered, since it is the model narrating past a result it invented.
        """
        stripped = _TOOL_RESULT_RE.sub("", text)
        result = ToolCallParseResult()
        last_end = 0

        for match in _TOOL_CALL_RE.finditer(stripped):
            before = stripped[last_end : match.start()].strip()
            if before:
                result.text_parts.append(before)
            last_end = match.end()

            site = self._decode(match.group(1))
            if site is None:
                result.text_parts.append(match.group(0))
            else:
                result.tool_calls.append(site)

        remaining = stripped[last_end:].strip()
        if remaining and not result.tool_calls:
            result.text_parts.append(remaining)

        result.tool_calls = drop_rehearsals(result.tool_calls)
        return result

    @staticmethod
    def _decode(body: str) -> ToolCallSite | None:
        try:
            repaired = _CODE_POINT_ESCAPE_RE.sub(_escape_code_point, body)
            parsed = json.loads(repaired)
        except (ValueError, OverflowError):
            logger.debug("Tool call marker is not valid JSON: %.200s", body)
            return None
        if not isinstance(parsed, dict):
            return None
        name = parsed.get("name")
        arguments = parsed.get("arguments")
        return ToolCallSite(
            name=name if isinstance(name, str) and name else "unknown",
            arguments=arguments if isinstance(arguments, dict) else {},
        )


def drop_rehearsals(calls: list[ToolCallSite]) -> list[ToolCallSite]:
    """Drop empty-argument calls to a tool that is also called with arguments.

    Empty-argument calls to tools that never receive arguments are kept.
    """
    named_with_args = {c.name for c in calls if c.arguments}
    return [c for c in calls if c.arguments or c.name not in named_with_args]


def extract_tool_calls(text: str) -> ToolCallParseResult:
    """Module-level shortcut for :meth:`ToolCallParser.parse`."""
    return ToolCallParser().parse(text)


def _escape_code_point(match: re.Match[str]) -> str:
    # Re-escaped so quotes, backslashes and control characters stay valid JSON.
    return json.dumps(chr(int(match.group(1), 16)))[1:-1]
