"""Reading screenplay input and writing rendered output for CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from fountainkit.config import get_logger
from fountainkit.exceptions import ParseError, RenderError
from fountainkit.parser import Document, FountainParser

logger = get_logger(__name__)

STDIO_PATH = "-"


def is_stdio(path: Path | None) -> bool:
    """True when a path argument means stdin or stdout."""
    return path is None or str(path) == STDIO_PATH


def read_document(input_path: Path | None) -> Document:
    """Parse the screenplay at ``input_path``, or stdin when omitted or ``-``.

    Raises:
        ParseError: If the source cannot be read or decoded
    """
    parser = FountainParser()
    if not is_stdio(input_path):
        return parser.parse_file(input_path)

    logger.debug("Reading screenplay from stdin")
    try:
        data = sys.stdin.buffer.read()
    except (OSError, ValueError) as e:
        raise ParseError(
            message="Failed to read screenplay from stdin",
            details={"error": str(e)},
        ) from e
    return parser.parse(data)


def write_output(text: str, output_path: Path | None, newline: bool = True) -> None:
    """Write fully rendered output to ``output_path`` or stdout.

    Raises:
        RenderError: If the output file cannot be written
    """
    if newline and not text.endswith("\n"):
        text += "\n"

    if is_stdio(output_path):
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise RenderError(
            message=f"Failed to write output: {output_path}",
            hint="Check that the directory exists and is writable.",
            details={"file": str(output_path), "error": str(e)},
        ) from e
    logger.info("Wrote output", path=str(output_path), chars=len(text))
