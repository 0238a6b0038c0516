"""OpenTelemetry tracing helpers for agentwire.

Parsers, request projection and the CLI emulator open spans through
``get_tracer()``. Without a configured SDK the OpenTelemetry API hands out
no-op tracers, so instrumentation costs nothing unless a host opts in with
:func:`configure_telemetry` (requires the ``otel`` extra).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from agentwire.core.interface.models import ParsedAssistantResult

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout agentwire instrumentation
# ---------------------------------------------------------------------------

ATTR_VENDOR = "agentwire.vendor"
ATTR_MODEL = "agentwire.model"
ATTR_STOP_REASON = "agentwire.stop_reason"
ATTR_BLOCK_COUNT = "agentwire.blocks"
ATTR_TOOL_CALLS = "agentwire.tool_calls"
ATTR_MESSAGE_COUNT = "agentwire.messages"
ATTR_RAW_BYTES = "agentwire.raw_bytes"
ATTR_CLI_COMMAND = "agentwire.cli.command"
ATTR_CLI_EXIT_CODE = "agentwire.cli.exit_code"

_INSTRUMENTATION_NAME = "agentwire"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_result(span: trace.Span, result: ParsedAssistantResult | None) -> None:
    """Attach the outcome of one assembled assistant turn to *span*."""
    if result is None:
        span.set_attribute(ATTR_BLOCK_COUNT, 0)
        return
    span.set_attribute(ATTR_STOP_REASON, result.stop_reason)
    span.set_attribute(ATTR_BLOCK_COUNT, len(result.message.content))
    span.set_attribute(ATTR_TOOL_CALLS, len(result.message.tool_uses))


def configure_telemetry(
    *,
    service_name: str = "agentwire",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider (requires ``agentwire[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON to stdout.
    otlp_endpoint:
        If set, export spans via OTLP/gRPC to this endpoint.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install agentwire[otel]"
        )
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)
    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter()))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install agentwire[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
