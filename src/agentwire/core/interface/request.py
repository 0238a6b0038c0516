"""Outbound request projection and inbound history normalization.

``project_request`` turns stored CMS history plus request settings into the
vendor-shaped body (and hub path) for one outbound call. The body is built
from fresh dicts, so mutating it never touches the stored messages.
"""

import copy
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from agentwire.core.interface.models import CanonicalMessage, ToolDefinition
from agentwire.core.interface.transpilers import get_transpiler
from agentwire.core.interface.vendor import Vendor
from agentwire.utils.telemetry import (
    ATTR_MESSAGE_COUNT,
    ATTR_MODEL,
    ATTR_VENDOR,
    get_tracer,
)

_tracer = get_tracer(__name__)

DEFAULT_MAX_TOKENS = 4096
DEFAULT_GEMINI_MAX_OUTPUT_TOKENS = 8192

_OPENAI_PATHS: dict[Vendor, str] = {
    Vendor.OPENAI: "/api/openai/v1/chat/completions",
    Vendor.OLLAMA: "/api/ollama/v1/chat/completions",
    Vendor.GEMINI_OPENAI: "/api/gemini/v1beta/openai/chat/completions",
}
ANTHROPIC_PATH = "/api/anthropic/v1/messages"


class ProjectedRequest(BaseModel):
    """A vendor request ready to hand to a transport."""

    vendor: Vendor
    path: str
    body: dict[str, Any]


def project_request(
    vendor: Vendor | str,
    messages: Sequence[CanonicalMessage],
    *,
    model: str,
    max_tokens: int | None = None,
    system: str | None = None,
    tools: Sequence[ToolDefinition] = (),
    stream: bool = True,
) -> ProjectedRequest:
    """Build the request body for *vendor* from canonical history."""
    vendor = Vendor(vendor)
    with _tracer.start_as_current_span("request.project") as span:
        span.set_attribute(ATTR_VENDOR, vendor.value)
        span.set_attribute(ATTR_MODEL, model)
        span.set_attribute(ATTR_MESSAGE_COUNT, len(messages))

        wire_messages = get_transpiler(vendor).to_provider(messages)
        if vendor is Vendor.GEMINI:
            return _gemini_request(wire_messages, model, max_tokens, system, tools)
        if vendor.family == "openai":
            return _openai_request(
                vendor, wire_messages, model, max_tokens, system, tools, stream
            )
        return _anthropic_request(
            vendor, wire_messages, model, max_tokens, system, tools, stream
        )


def normalize_history(
    vendor: Vendor | str, messages: Sequence[dict[str, Any]]
) -> list[CanonicalMessage]:
    """Convert a history stored in *vendor*'s wire format to CMS."""
    return get_transpiler(vendor).from_provider(messages)


# ---------------------------------------------------------------------------
# Per-family bodies
# ---------------------------------------------------------------------------


def _anthropic_request(
    vendor: Vendor,
    messages: list[dict[str, Any]],
    model: str,
    max_tokens: int | None,
    system: str | None,
    tools: Sequence[ToolDefinition],
    stream: bool,
) -> ProjectedRequest:
    body: dict[str, Any] = {
        "model": model,
        "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
        "messages": messages,
        "stream": stream,
    }
    if system:
        body["system"] = system
    if tools:
        body["tools"] = [
            {
                "name": t.name,
                "description": t.description,
                "input_schema": copy.deepcopy(t.input_schema),
            }
            for t in tools
        ]
    return ProjectedRequest(vendor=vendor, path=ANTHROPIC_PATH, body=body)


def _openai_request(
    vendor: Vendor,
    messages: list[dict[str, Any]],
    model: str,
    max_tokens: int | None,
    system: str | None,
    tools: Sequence[ToolDefinition],
    stream: bool,
) -> ProjectedRequest:
    gemini_compat = vendor is Vendor.GEMINI_OPENAI
    if system:
        messages = [{"role": "system", "content": system}, *messages]

    body: dict[str, Any] = {"model": model, "messages": messages, "stream": stream}
    if gemini_compat:
        body["max_tokens"] = max_tokens or DEFAULT_MAX_TOKENS
    else:
        body["max_completion_tokens"] = max_tokens or DEFAULT_MAX_TOKENS
        if stream:
            body["stream_options"] = {"include_usage": True}

    if tools:
        body["tools"] = [
            {
                "type": "function",
                "function": {
                    "name": t.name,
                    "description": t.description,
                    "parameters": (
                        sanitize_tool_schema(t.input_schema)
                        if gemini_compat
                        else copy.deepcopy(t.input_schema)
                    ),
                },
            }
            for t in tools
        ]
        if gemini_compat:
            body["tool_choice"] = "auto"
    return ProjectedRequest(vendor=vendor, path=_OPENAI_PATHS[vendor], body=body)


def _gemini_request(
    contents: list[dict[str, Any]],
    model: str,
    max_tokens: int | None,
    system: str | None,
    tools: Sequence[ToolDefinition],
) -> ProjectedRequest:
    body: dict[str, Any] = {"contents": contents}
    if system:
        body["system_instruction"] = {"parts": [{"text": system}]}
    if tools:
        body["tools"] = [
            {
                "functionDeclarations": [
                    {
                        "name": t.name,
                        "description": t.description,
                        "parameters": sanitize_tool_schema(
                            t.input_schema, uppercase_types=True
                        ),
                    }
                    for t in tools
                ]
            }
        ]
        body["toolConfig"] = {"functionCallingConfig": {"mode": "AUTO"}}
    body["generationConfig"] = {
        "maxOutputTokens": max_tokens or DEFAULT_GEMINI_MAX_OUTPUT_TOKENS
    }
    path = f"/api/gemini/v1beta/models/{model}:streamGenerateContent?alt=sse"
    return ProjectedRequest(vendor=Vendor.GEMINI, path=path, body=body)


def sanitize_tool_schema(
    schema: dict[str, Any], *, uppercase_types: bool = False
) -> dict[str, Any]:
    """Rewrite a JSON Schema into the subset Gemini accepts.

    Drops ``additionalProperties``, gives object schemas a ``properties``
    map, and optionally uppercases ``type`` names for the native API.
    Nested ``properties`` and ``items`` are rewritten recursively.
    """
    result = copy.deepcopy(schema)
    result.pop("additionalProperties", None)

    kind = result.get("type")
    if isinstance(kind, str):
        if kind.lower() == "object" and not result.get("properties"):
            result["properties"] = {}
        if uppercase_types:
            result["type"] = kind.upper()

    properties = result.get("properties")
    if isinstance(properties, dict):
        result["properties"] = {
            key: (
                sanitize_tool_schema(value, uppercase_types=uppercase_types)
                if isinstance(value, dict)
                else value
            )
            for key, value in properties.items()
        }
    if isinstance(result.get("items"), dict):
        result["items"] = sanitize_tool_schema(
            result["items"], uppercase_types=uppercase_types
        )
    return result
