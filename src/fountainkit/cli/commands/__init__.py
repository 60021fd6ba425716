"""fountainkit CLI commands."""

from __future__ import annotations

from fountainkit.cli.commands.export import export_command
from fountainkit.cli.commands.fmt import fmt_command
from fountainkit.cli.commands.html import html_command

__all__ = [
    "export_command",
    "fmt_command",
    "html_command",
]
