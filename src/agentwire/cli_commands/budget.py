"""``agentwire budget`` - show the CLI cost ceiling for a token limit."""

from __future__ import annotations

import sys

import click

from agentwire.cli_commands._output import console
from agentwire.config.errors import SettingsValidationError
from agentwire.config.loader import load_settings
from agentwire.core.pricing.budget import (
    BUDGET_MULTIPLIER,
    DEFAULT_OUTPUT_PER_MTOK,
    MAX_BUDGET_USD,
    calculate_budget,
)


@click.command()
@click.argument("max_tokens", type=click.IntRange(min=1))
@click.option("--model", default=None, help="Model id to price; unknown ids use the default tier.")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Settings YAML file with pricing overrides.")
def budget(max_tokens: int, model: str | None, config_file: str | None) -> None:
    """Translate MAX_TOKENS into the USD budget passed to the CLI."""
    try:
        pricing = load_settings(config_file).pricing_table()
    except SettingsValidationError as exc:
        console.print(f"[red]Validation error:[/red] {exc}")
        sys.exit(1)

    price = pricing.resolve(model) if model else None
    rate = price.output_per_mtok if price and price.output_per_mtok else DEFAULT_OUTPUT_PER_MTOK
    value = calculate_budget(max_tokens, model, pricing)

    console.print(f"[bold]Budget:[/bold] ${value:.4f}")
    console.print(f"  Model: {model or '(none)'}{'' if price else ' [dim](default tier)[/dim]'}")
    console.print(f"  Output price: ${rate:g}/M x {BUDGET_MULTIPLIER:g}, capped at ${MAX_BUDGET_USD:g}")
