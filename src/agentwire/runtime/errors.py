"""Shared error types for the transport-facing runtime layer.

Parse-level problems (a malformed SSE record, a bad tool-call marker) are
recovered locally and never raise. The errors here are for process-level
failures that end one request.
"""


class WireError(Exception):
    """Base error for all agentwire runtime failures."""


class CliBackendError(WireError):
    """The CLI backend could not produce a response."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("CLI backend error" + (f": {detail}" if detail else ""))


class CliSpawnError(CliBackendError):
    """The CLI process could not be started (missing binary, permissions)."""


class CliTimeoutError(CliBackendError):
    """The CLI process exceeded its timeout and was killed."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"process killed after {timeout}s timeout")


class CliProcessError(CliBackendError):
    """The CLI process exited non-zero without usable output."""

    def __init__(self, exit_code: int, stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        msg = f"process exited with code {exit_code}"
        if stderr:
            msg += f": {stderr[:500]}"
        super().__init__(msg)
