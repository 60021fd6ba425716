"""The ``fountainkit`` command."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit import __version__
from fountainkit.cli.commands import export_command, fmt_command, html_command
from fountainkit.config import (
    clear_settings_cache,
    configure_logging,
    get_logger,
    get_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="fountainkit",
    help="Parse Fountain screenplays and render them as text, HTML or data",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="fmt")(fmt_command)
app.command(name="html")(html_command)
app.command(name="export")(export_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show fountainkit version."""
    if json_output:
        info = {
            "name": "fountainkit",
            "version": __version__,
            "description": "Fountain screenplay parser and renderer",
        }
        # Raw JSON, no rich formatting
        print(json.dumps(info, indent=2))
        return
    console.print(f"fountainkit v{__version__}")


def _set_log_level(level: str, debug: bool = False) -> None:
    """Route a command line log level through the environment and reload."""
    os.environ["FOUNTAINKIT_LOG_LEVEL"] = level
    if debug:
        os.environ["FOUNTAINKIT_DEBUG"] = "true"
    clear_settings_cache()
    configure_logging(get_settings())


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (YAML, TOML or JSON) used by every command",
            envvar="FOUNTAINKIT_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log at INFO level"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Log at DEBUG level with call sites",
            envvar="FOUNTAINKIT_DEBUG",
        ),
    ] = False,
) -> None:
    """Parse Fountain screenplays and render them as text, HTML or data."""
    if debug:
        _set_log_level("DEBUG", debug=True)
    elif verbose:
        _set_log_level("INFO")

    logger.debug("Global options", config_file=str(config) if config else None)
    ctx.obj = {"config": config, "verbose": verbose, "debug": debug}


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
