"""Render a Fountain screenplay as HTML."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fountainkit.cli.utils.config import is_verbose, load_cli_settings
from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.cli.utils.io import read_document, write_output
from fountainkit.render.html import render_html
from fountainkit.render.options import RenderOptions


def html_command(
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
    page: Annotated[
        bool | None,
        typer.Option("--page/--fragment", help="Emit a full HTML page"),
    ] = None,
    inline_css: Annotated[
        bool | None,
        typer.Option("--inline-css/--no-inline-css", help="Embed a <style> block"),
    ] = None,
    link_css: Annotated[
        bool | None,
        typer.Option("--link-css/--no-link-css", help="Link the stylesheet"),
    ] = None,
    css: Annotated[
        Path | None,
        typer.Option("--css", help="Stylesheet to inline or link"),
    ] = None,
) -> None:
    """Render a Fountain screenplay as an HTML fragment or page."""
    try:
        settings = load_cli_settings(
            ctx,
            {
                "html_page": page,
                "inline_css": inline_css,
                "link_css": link_css,
                "css_path": css,
            },
        )
        document = read_document(input_path)
        text = render_html(document, RenderOptions.from_settings(settings))
        write_output(text, output)
    except Exception as e:
        handle_cli_error(e, verbose=is_verbose(ctx))
