"""CliEmulator, presenting the Anthropic SSE protocol on top of a CLI model.

The whole CLI run is buffered before anything is emitted: tool calls are
recovered from complete message text, and a ``</tool_call>`` tag may arrive
long after its opening tag. The trade-off is latency, as the caller sees
no incremental streaming.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from agentwire.core.interface.ids import ToolUseIdFactory
from agentwire.core.interface.models import ParsedAssistantResult
from agentwire.core.polyfills.strategy import PromptedStrategy
from agentwire.core.pricing.models import PricingTable
from agentwire.core.streaming.parsers.anthropic import AnthropicStreamParser
from agentwire.core.streaming.sse import format_sse
from agentwire.runtime.cli_backend.args import build_cli_args
from agentwire.runtime.cli_backend.events import parse_stream_line
from agentwire.runtime.cli_backend.models import CliBackendConfig, CliRequest
from agentwire.runtime.cli_backend.transcript import format_messages_as_prompt
from agentwire.runtime.errors import CliProcessError
from agentwire.runtime.process.models import ExecutionRequest
from agentwire.runtime.process.runner import LocalProcessRunner, ProcessRunner
from agentwire.utils.telemetry import (
    ATTR_BLOCK_COUNT,
    ATTR_CLI_COMMAND,
    ATTR_CLI_EXIT_CODE,
    ATTR_MESSAGE_COUNT,
    ATTR_MODEL,
    ATTR_TOOL_CALLS,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class CliEmulator:
    """Runs one CLI process per request and replays it as Anthropic SSE.

    Instances hold configuration only. Every call builds its own id factory
    and subprocess, so concurrent calls share no mutable state.
    """

    def __init__(
        self,
        config: CliBackendConfig | None = None,
        *,
        runner: ProcessRunner | None = None,
        pricing: PricingTable | None = None,
    ) -> None:
        self._config = config or CliBackendConfig()
        self._runner = runner or LocalProcessRunner()
        self._pricing = pricing
        self._strategy = PromptedStrategy()

    @property
    def config(self) -> CliBackendConfig:
        return self._config

    async def stream(self, request: CliRequest) -> AsyncIterator[str]:
        """Yield SSE chunks for *request* once the CLI process has exited.

        Raises :class:`~agentwire.runtime.errors.CliSpawnError` or
        :class:`~agentwire.runtime.errors.CliTimeoutError` before the first
        chunk; a timed-out run never yields anything.
        """
        chunks = await self._run(request)
        for chunk in chunks:
            yield chunk

    async def complete(self, request: CliRequest) -> ParsedAssistantResult | None:
        """Run *request* and parse the synthesized stream into one result."""
        chunks = await self._run(request)
        return AnthropicStreamParser().parse("".join(chunks))

    async def _run(self, request: CliRequest) -> list[str]:
        config = self._config
        with _tracer.start_as_current_span("cli.emulate") as span:
            span.set_attribute(ATTR_CLI_COMMAND, config.command)
            span.set_attribute(ATTR_MODEL, request.model or "default")
            span.set_attribute(ATTR_MESSAGE_COUNT, len(request.messages))
            logger.info(
                "CLI request model=%s messages=%d tools=%d max_tokens=%s",
                request.model or "default",
                len(request.messages),
                len(request.tools),
                request.max_tokens or "none",
            )

            args = build_cli_args(request, config, self._pricing)
            prompt = format_messages_as_prompt(request.messages, config.image_dir)
            result = await self._runner.execute(
                ExecutionRequest(
                    command=[config.command, *args],
                    stdin=prompt,
                    timeout=config.timeout,
                    env=config.env,
                )
            )
            span.set_attribute(ATTR_CLI_EXIT_CODE, result.exit_code)

            ids = ToolUseIdFactory()
            events = [
                event
                for line in result.stdout.splitlines()
                for event in parse_stream_line(line, ids, self._strategy)
            ]

            if result.exit_code != 0:
                if not events:
                    logger.error(
                        "CLI exited with code %d: %s", result.exit_code, result.stderr[:500]
                    )
                    raise CliProcessError(result.exit_code, result.stderr)
                logger.warning(
                    "CLI exited with code %d but produced output; using it",
                    result.exit_code,
                )

            starts = [e["content_block"] for e in events if e["type"] == "content_block_start"]
            span.set_attribute(ATTR_BLOCK_COUNT, len(starts))
            span.set_attribute(
                ATTR_TOOL_CALLS, sum(1 for b in starts if b["type"] == "tool_use")
            )
            return [format_sse(event) for event in events]
