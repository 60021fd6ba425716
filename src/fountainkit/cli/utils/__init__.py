"""Shared helpers for CLI commands."""

from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.cli.utils.io import read_document, write_output

__all__ = ["handle_cli_error", "read_document", "write_output"]
