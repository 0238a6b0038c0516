"""Canonical message model, vendor selection and transpilation."""

from agentwire.core.interface.ids import ToolUseIdFactory
from agentwire.core.interface.models import (
    CanonicalMessage,
    ContentBlock,
    ImageBlock,
    ImageSource,
    ParsedAssistantResult,
    StopReason,
    TextBlock,
    TokenUsage,
    ToolCallSite,
    ToolDefinition,
    ToolResultBlock,
    ToolUseBlock,
)
from agentwire.core.interface.request import (
    ProjectedRequest,
    normalize_history,
    project_request,
)
from agentwire.core.interface.transpiler import Transpiler
from agentwire.core.interface.vendor import Vendor

__all__ = [
    "CanonicalMessage",
    "ContentBlock",
    "ImageBlock",
    "ImageSource",
    "ParsedAssistantResult",
    "ProjectedRequest",
    "StopReason",
    "TextBlock",
    "TokenUsage",
    "ToolCallSite",
    "ToolDefinition",
    "ToolResultBlock",
    "ToolUseBlock",
    "ToolUseIdFactory",
    "Transpiler",
    "Vendor",
    "normalize_history",
    "project_request",
]
