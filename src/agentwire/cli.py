"""agentwire CLI entrypoint."""

from __future__ import annotations

import logging

import click

from agentwire import __version__


@click.group()
@click.version_option(version=__version__, prog_name="agentwire")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """agentwire: vendor-neutral LLM wire-format tooling."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# Register subcommands
from agentwire.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
