"""``agentwire convert`` - project history into a vendor request or back."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import TypeAdapter, ValidationError

from agentwire.cli_commands._output import console, print_json
from agentwire.cli_commands.parse import VENDOR_CHOICE
from agentwire.core.interface.models import CanonicalMessage, ToolDefinition
from agentwire.core.interface.request import normalize_history, project_request

_MESSAGES = TypeAdapter(list[CanonicalMessage])
_TOOLS = TypeAdapter(list[ToolDefinition])


@click.command()
@click.argument("vendor", type=VENDOR_CHOICE)
@click.argument("history_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--system", default=None, help="System prompt for the request.")
@click.option("--model", default="default", show_default=True, help="Model id for the request.")
@click.option("--max-tokens", type=int, default=None, help="Output token ceiling.")
@click.option("--tools", "tools_file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON file with a list of tool definitions.")
@click.option("--normalize", is_flag=True,
              help="Treat HISTORY_FILE as VENDOR-shaped messages and print canonical ones.")
def convert(
    vendor: str,
    history_file: str,
    system: str | None,
    model: str,
    max_tokens: int | None,
    tools_file: str | None,
    normalize: bool,
) -> None:
    """Convert the JSON message list in HISTORY_FILE.

    By default HISTORY_FILE holds canonical messages and the VENDOR request
    body is printed. With --normalize the direction is reversed.
    """
    try:
        data = _read_list(Path(history_file))
        if normalize:
            messages = normalize_history(vendor, data)
            print_json([m.model_dump(mode="json", by_alias=True, exclude_none=True) for m in messages])
            return

        tools = _TOOLS.validate_python(_read_list(Path(tools_file))) if tools_file else []
        projected = project_request(
            vendor,
            _MESSAGES.validate_python(data),
            model=model,
            max_tokens=max_tokens,
            system=system,
            tools=tools,
        )
    except (OSError, ValueError, ValidationError) as exc:
        console.print(f"[red]Conversion error:[/red] {exc}")
        sys.exit(1)

    print_json({"path": projected.path, "body": projected.body})


def _read_list(path: Path) -> list[Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        msg = f"{path} must contain a JSON list"
        raise ValueError(msg)
    return data
