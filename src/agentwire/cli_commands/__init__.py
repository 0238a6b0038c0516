"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from agentwire.cli_commands.budget import budget
    from agentwire.cli_commands.convert import convert
    from agentwire.cli_commands.emulate import emulate
    from agentwire.cli_commands.parse import parse

    cli.add_command(parse)
    cli.add_command(convert)
    cli.add_command(emulate)
    cli.add_command(budget)
