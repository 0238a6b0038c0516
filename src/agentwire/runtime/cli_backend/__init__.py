"""CLI backend: a line-delimited-JSON model process behind Anthropic SSE."""

from agentwire.runtime.cli_backend.args import build_cli_args
from agentwire.runtime.cli_backend.emulator import CliEmulator
from agentwire.runtime.cli_backend.events import parse_stream_line, synthesize_sse_events
from agentwire.runtime.cli_backend.models import CliBackendConfig, CliRequest
from agentwire.runtime.cli_backend.transcript import (
    format_messages_as_prompt,
    write_temp_image,
)

__all__ = [
    "CliBackendConfig",
    "CliEmulator",
    "CliRequest",
    "build_cli_args",
    "format_messages_as_prompt",
    "parse_stream_line",
    "synthesize_sse_events",
    "write_temp_image",
]
