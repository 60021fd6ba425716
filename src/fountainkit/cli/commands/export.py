"""Export a parsed Fountain screenplay as JSON or YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fountainkit.cli.utils.config import is_verbose, load_cli_settings
from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.cli.utils.io import read_document, write_output
from fountainkit.render.serialize import SerializationFormat, dumps


def export_command(
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
    output_format: Annotated[
        SerializationFormat,
        typer.Option("--format", "-f", case_sensitive=False, help="Output format"),
    ] = SerializationFormat.JSON,
    pretty: Annotated[
        bool | None,
        typer.Option("--pretty/--compact", help="Indented or compact output"),
    ] = None,
    type_names: Annotated[
        bool | None,
        typer.Option(
            "--type-names/--type-ids",
            help="Write element types as names instead of integers",
        ),
    ] = None,
) -> None:
    """Export the parsed document model as JSON or YAML."""
    try:
        settings = load_cli_settings(
            ctx, {"pretty": pretty, "type_names": type_names}
        )
        document = read_document(input_path)
        text = dumps(
            document,
            fmt=output_format,
            pretty=settings.pretty,
            type_names=settings.type_names,
        )
        write_output(text, output)
    except Exception as e:
        handle_cli_error(e, verbose=is_verbose(ctx))
