"""Runtime layer: process execution and the CLI backend emulator."""

from agentwire.runtime.errors import (
    CliBackendError,
    CliProcessError,
    CliSpawnError,
    CliTimeoutError,
    WireError,
)

__all__ = [
    "CliBackendError",
    "CliProcessError",
    "CliSpawnError",
    "CliTimeoutError",
    "WireError",
]
