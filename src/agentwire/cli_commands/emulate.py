"""``agentwire emulate`` - run a request through the CLI backend."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from agentwire.cli_commands._output import console
from agentwire.config.errors import SettingsValidationError
from agentwire.config.loader import apply_telemetry, load_settings
from agentwire.runtime.cli_backend.emulator import CliEmulator
from agentwire.runtime.cli_backend.models import CliRequest
from agentwire.runtime.errors import WireError


@click.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Settings YAML file.")
@click.option("--backend", default=None, help="Named CLI backend from the settings file.")
def emulate(request_file: str, config_file: str | None, backend: str | None) -> None:
    """Send REQUEST_FILE to the CLI backend and print the SSE it produces.

    REQUEST_FILE is an Anthropic-style JSON body: ``system``, ``messages``,
    ``model``, ``max_tokens`` and ``tools``.
    """
    try:
        settings = load_settings(config_file)
        config = settings.backend(backend)
        raw = json.loads(Path(request_file).read_text(encoding="utf-8"))
        request = CliRequest.model_validate(raw)
    except (SettingsValidationError, KeyError, ValueError, ValidationError) as exc:
        console.print(f"[red]Validation error:[/red] {exc}")
        sys.exit(1)

    apply_telemetry(settings)
    emulator = CliEmulator(config, pricing=settings.pricing_table())

    try:
        asyncio.run(_emit(emulator, request))
    except WireError as exc:
        console.print(f"[red]Backend error:[/red] {exc}")
        sys.exit(1)


async def _emit(emulator: CliEmulator, request: CliRequest) -> None:
    async for chunk in emulator.stream(request):
        click.echo(chunk, nl=False)
