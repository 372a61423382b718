"""layoutiq CLI entrypoint."""

from __future__ import annotations

import logging

import click

from layoutiq import __version__


@click.group()
@click.version_option(version=__version__, prog_name="layoutiq")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Python logging level.",
)
def main(log_level: str) -> None:
    """layoutiq: spatial layout intelligence."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from layoutiq.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
