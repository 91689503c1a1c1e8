"""Main Typer application: global options, logging, subcommand registration.

Entry point: ``hydrapin`` (configured via pyproject.toml console scripts).

The package and output file are global options, given before the
subcommand::

    hydrapin --package hello --output overlay.nix pin
    hydrapin --package hello --output overlay.nix unpin
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.logging import RichHandler

from hydrapin.cli.commands.pin import pin_cmd
from hydrapin.cli.commands.unpin import unpin_cmd
from hydrapin.config import config

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

app = typer.Typer(
    name="hydrapin",
    help="Pin packages built on Hydra into a reproducible Nix overlay.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


class Invocation(BaseModel):
    """Global options shared by every subcommand."""

    model_config = ConfigDict(frozen=True)

    package: str
    output: Path
    hydra_check: str


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    package: str = typer.Option(
        ...,
        "--package",
        "-p",
        help="Attribute name of the package to pin or unpin.",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output Nix file to write.",
    ),
    hydra_check: str = typer.Option(
        None,
        "--hydra-check",
        "-b",
        help="hydra-check binary to use (default: $HYDRA_CHECK or hydra-check).",
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: $HYDRAPIN_LOG_LEVEL or WARNING).",
    ),
) -> None:
    """Pin packages built on Hydra into a reproducible Nix overlay."""
    level = (log_level or config.log_level).upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"unknown level {level!r}, expected one of {', '.join(LOG_LEVELS)}",
            param_hint="'--log-level' / HYDRAPIN_LOG_LEVEL",
        )
    configure_logging(level)
    ctx.obj = Invocation(
        package=package,
        output=output,
        hydra_check=hydra_check or config.hydra_check,
    )


# Register subcommands
app.command(name="pin", help="Resolve the package on Hydra and append it to the overlay.")(pin_cmd)
app.command(name="unpin", help="Remove every entry for the package from the overlay.")(unpin_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
