"""Tool-call prompt injection for backends without native tool calling.

Appends the ``<tool_call>`` format instructions and a compact tool catalog
to the caller's system prompt. The catalog keeps only what a model needs
to format calls correctly: names, descriptions, parameter types, enum
values and required parameters.
"""

from collections.abc import Sequence
from typing import Any

from agentwire.core.interface.models import ToolDefinition

TOOL_CALL_FORMAT_INSTRUCTIONS = """

When you need to call a tool, use this exact XML format:
<tool_call>
{"name": "tool_name", "arguments": {"param1": "value1", "param2": "value2"}}
</tool_call>

Tool results will be provided in <tool_result> blocks. Do not simulate or fabricate tool results.
Always include all required parameters. Never call a tool with empty arguments.
Use valid JSON only (no ES6 syntax like \\u{XXXX}; use literal characters instead)."""


class ToolCallInjector:
    """Builds the composed system prompt for the CLI backend."""

    def build_system_prompt(
        self, system: str | None, tools: Sequence[ToolDefinition] = ()
    ) -> str:
        """Return *system* followed by format instructions and the catalog."""
        return (system or "") + TOOL_CALL_FORMAT_INSTRUCTIONS + serialize_tools(tools)


def serialize_tools(tools: Sequence[ToolDefinition]) -> str:
    if not tools:
        return ""

    lines = ["\n\nAvailable tools:"]
    for tool in tools:
        properties = tool.input_schema.get("properties")
        if not properties:
            lines.append(f"- {tool.name}: {tool.description}")
            continue

        params = [_describe_param(key, schema) for key, schema in properties.items()]
        required = tool.input_schema.get("required") or []
        required_note = f" Required: {', '.join(required)}." if required else ""
        lines.append(f"- {tool.name}: {tool.description}{required_note}")
        lines.append(f"  params: {'; '.join(params)}")
    return "\n".join(lines)


def _describe_param(key: str, schema: Any) -> str:
    parts = [key]
    if not isinstance(schema, dict):
        return key
    if schema.get("type"):
        parts.append(f"({schema['type']})")
    if schema.get("enum"):
        parts.append(f"[{'|'.join(str(v) for v in schema['enum'])}]")
    if schema.get("description"):
        parts.append(f"- {schema['description']}")
    return " ".join(parts)
