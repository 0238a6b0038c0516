"""Data models for subprocess execution."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ExecutionRequest(BaseModel):
    """A request to run one command to completion."""

    command: list[str] = Field(..., description="Command and arguments to execute.")
    stdin: str | None = Field(default=None, description="Text written to stdin before it is closed.")
    timeout: float = Field(default=120.0, description="Wall-clock limit in seconds.")
    env: dict[str, str] = Field(default_factory=dict, description="Extra env vars on top of the inherited environment.")
    cwd: str | None = Field(default=None, description="Working directory for the process.")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Arbitrary metadata.")


class ProcessResult(BaseModel):
    """Result of a completed process."""

    exit_code: int = Field(..., description="Process exit code.")
    stdout: str = Field(default="", description="Captured stdout.")
    stderr: str = Field(default="", description="Captured stderr.")
    duration: float = Field(default=0.0, description="Wall-clock seconds until exit.")
