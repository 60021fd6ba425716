"""Format a Fountain screenplay as plain text."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fountainkit.cli.utils.config import is_verbose, load_cli_settings
from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.cli.utils.io import read_document, write_output
from fountainkit.render.options import RenderOptions
from fountainkit.render.text import describe, render_text


def fmt_command(
    ctx: typer.Context,
    input_path: Annotated[
        Path | None,
        typer.Argument(
            metavar="INPUT",
            help="Fountain file to read ('-' or omitted reads stdin)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to a file instead of stdout"),
    ] = None,
    width: Annotated[
        int | None,
        typer.Option("--width", "-w", min=1, help="Wrap width for action/dialogue"),
    ] = None,
    section: Annotated[
        bool | None,
        typer.Option("--section/--no-section", help="Include section headings"),
    ] = None,
    synopsis: Annotated[
        bool | None,
        typer.Option("--synopsis/--no-synopsis", help="Include synopses"),
    ] = None,
    notes: Annotated[
        bool | None,
        typer.Option("--notes/--no-notes", help="Include notes"),
    ] = None,
    debug_listing: Annotated[
        bool,
        typer.Option(
            "--debug-listing",
            help="List classified elements instead of formatting them",
        ),
    ] = False,
    newline: Annotated[
        bool,
        typer.Option("--newline/--no-newline", help="End output with a newline"),
    ] = True,
) -> None:
    """Reformat a Fountain screenplay as wrapped, indented plain text."""
    try:
        settings = load_cli_settings(
            ctx,
            {
                "wrap_width": width,
                "show_section": section,
                "show_synopsis": synopsis,
                "show_notes": notes,
            },
        )
        document = read_document(input_path)
        if debug_listing:
            text = describe(document)
        else:
            text = render_text(document, RenderOptions.from_settings(settings))
        write_output(text, output, newline=newline)
    except Exception as e:
        handle_cli_error(e, verbose=is_verbose(ctx))
