"""Data models for the CLI backend."""

from __future__ import annotations

from pydantic import BaseModel, Field

from agentwire.core.interface.models import CanonicalMessage, ToolDefinition


class CliBackendConfig(BaseModel):
    """How to launch the CLI model process."""

    command: str = Field(default="claude", description="Executable to spawn.")
    args: list[str] = Field(default_factory=list, description="Extra arguments appended after the built ones.")
    timeout: float = Field(default=120.0, gt=0, description="Max response time in seconds.")
    env: dict[str, str] = Field(default_factory=dict, description="Extra env vars for the process.")
    image_dir: str | None = Field(default=None, description="Where image attachments are written; defaults to a temp dir.")


class CliRequest(BaseModel):
    """One Anthropic-style request routed to the CLI backend."""

    system: str | None = None
    messages: list[CanonicalMessage] = Field(default_factory=list)
    model: str | None = None
    max_tokens: int | None = Field(default=None, gt=0)
    tools: list[ToolDefinition] = Field(default_factory=list)
