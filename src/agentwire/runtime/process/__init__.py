"""Subprocess execution for process-backed model backends."""

from agentwire.runtime.process.models import ExecutionRequest, ProcessResult
from agentwire.runtime.process.runner import LocalProcessRunner, ProcessRunner

__all__ = ["ExecutionRequest", "LocalProcessRunner", "ProcessResult", "ProcessRunner"]
