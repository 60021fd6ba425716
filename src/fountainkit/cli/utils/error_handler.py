"""Reporting command failures on the terminal."""

from __future__ import annotations

import traceback

import typer
from rich.console import Console
from rich.markup import escape

from fountainkit.config import get_logger
from fountainkit.exceptions import FountainKitError

logger = get_logger(__name__)
# stdout is reserved for rendered documents
console = Console(stderr=True)


def _report_fountainkit_error(error: FountainKitError, verbose: bool) -> None:
    console.print(f"[red]✗ {escape(error.message)}[/red]")
    if error.hint:
        console.print(f"[yellow]→ {escape(error.hint)}[/yellow]")
    if verbose and error.details:
        console.print("\n[dim]Details:[/dim]")
        for key, value in error.details.items():
            console.print(f"  [dim]{escape(str(key))}:[/dim] {escape(str(value))}")


def _report_unexpected(error: Exception, verbose: bool) -> None:
    console.print(f"[red]✗ Unexpected error: {escape(str(error))}[/red]")
    if verbose:
        console.print("\n[dim]Full traceback:[/dim]")
        console.print(escape(traceback.format_exc()))
    else:
        console.print("[dim]Run with --verbose for full error details[/dim]")


def handle_cli_error(
    error: Exception, verbose: bool = False, exit_code: int = 1
) -> None:
    """Print a short explanation of ``error`` to stderr and exit.

    fountainkit errors show their message and hint, plus details when
    ``verbose``. Anything else is reported as unexpected, with a traceback
    when ``verbose``.

    Raises:
        typer.Exit: Always, with ``exit_code``
    """
    error_type = type(error).__name__

    if isinstance(error, FountainKitError):
        _report_fountainkit_error(error, verbose)
        logger.error(
            "Command failed",
            error_type=error_type,
            message=error.message,
            hint=error.hint,
            details=error.details,
            exit_code=exit_code,
        )
    elif isinstance(error, FileNotFoundError):
        console.print(f"[red]✗ File not found: {escape(str(error))}[/red]")
        console.print("[yellow]→ Check that the file path is correct[/yellow]")
        logger.error(
            "File not found",
            error=str(error),
            filename=error.filename,
            exit_code=exit_code,
        )
    else:
        _report_unexpected(error, verbose)
        logger.error(
            "Unexpected error",
            error=str(error),
            error_type=error_type,
            exit_code=exit_code,
            exc_info=True,
        )

    raise typer.Exit(exit_code)
