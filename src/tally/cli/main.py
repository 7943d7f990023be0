"""
Tally CLI entry point.

Usage:
  tally                      — open the counter (Up/Down to change, q to quit)
  tally --config PATH        — read settings from a TOML file
  tally --log-level DEBUG    — override the log level for this run
  tally --version            — show version
"""

from __future__ import annotations

import click
from rich.console import Console

from tally import __version__

console = Console()
err_console = Console(stderr=True)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", "-V", message="tally %(version)s")
@click.option(
    "--config",
    "config_path",
    default="",
    type=click.Path(dir_okay=False),
    help="Config file (default: $TALLY_CONFIG or ~/.tally/config.toml)",
)
@click.option(
    "--log-level",
    default="",
    type=click.Choice(["", "DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured log level",
)
def cli(config_path: str, log_level: str) -> None:
    """Tally — a terminal counter. Up/Down to change, q to quit."""
    from tally.cli._run import cmd_run

    cmd_run(config_path=config_path, log_level=log_level, console=console, err_console=err_console)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
