"""Command-line construction for the CLI backend."""

from __future__ import annotations

from agentwire.core.polyfills.tool_call_injector import ToolCallInjector
from agentwire.core.pricing.budget import calculate_budget
from agentwire.core.pricing.models import PricingTable
from agentwire.runtime.cli_backend.models import CliBackendConfig, CliRequest


def build_cli_args(
    request: CliRequest,
    config: CliBackendConfig,
    pricing: PricingTable | None = None,
) -> list[str]:
    """Return the argument list (without the executable) for one request.

    Built-in CLI tools are disabled with ``--tools ""`` so the process acts as
    a plain model; tools are described in the system prompt instead. A
    ``max_tokens`` ceiling is passed as a dollar budget.
    """
    args = [
        "-p",
        "--output-format",
        "stream-json",
        "--verbose",
        "--no-session-persistence",
        "--tools",
        "",
    ]
    if request.model:
        args += ["--model", request.model]

    system_prompt = ToolCallInjector().build_system_prompt(request.system, request.tools)
    args += ["--system-prompt", system_prompt]

    if request.max_tokens:
        budget = calculate_budget(request.max_tokens, request.model, pricing)
        args += ["--max-budget-usd", f"{budget:.4f}"]

    args += config.args
    return args
