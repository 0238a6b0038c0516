"""``agentwire parse`` - parse a captured vendor stream."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from agentwire.cli_commands._output import console, print_parse_result
from agentwire.core.interface.vendor import Vendor
from agentwire.core.pricing.budget import estimate_cost
from agentwire.core.streaming.parsers import parse_stream

VENDOR_CHOICE = click.Choice([v.value for v in Vendor])


@click.command()
@click.argument("vendor", type=VENDOR_CHOICE)
@click.argument("stream_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--model", default=None, help="Model id used to estimate cost.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def parse(vendor: str, stream_file: str, model: str | None, as_json: bool) -> None:
    """Parse a raw SSE body captured from VENDOR.

    STREAM_FILE holds the complete response body. Exits with status 1 when
    the stream contains no content.
    """
    raw = Path(stream_file).read_text(encoding="utf-8")
    result = parse_stream(Vendor(vendor), raw)
    if result is None:
        console.print("[yellow]No content blocks in stream.[/yellow]")
        sys.exit(1)

    cost = estimate_cost(result.usage, model) if model and result.usage else None
    print_parse_result(result, cost, as_json=as_json)
