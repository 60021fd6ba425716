"""Exceptions raised by fountainkit.

Every error carries a one line ``message``, an optional ``hint`` telling the
user what to do about it, and optional ``details`` for verbose output.
Screenplay content itself never causes an error.
"""

from __future__ import annotations

from typing import Any


class FountainKitError(Exception):
    """Base class for all fountainkit errors."""

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Message, hint and details as a multi-line string."""
        lines = [f"Error: {self.message}"]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        if self.details:
            lines.append("Details:")
            lines.extend(f"  {key}: {value}" for key, value in self.details.items())
        return "\n".join(lines)


class ConfigurationError(FountainKitError):
    """Unusable configuration file or setting."""


class ParseError(FountainKitError):
    """A screenplay source could not be read or decoded."""


class FountainFileNotFoundError(ParseError):
    """The screenplay file does not exist."""


class RenderError(FountainKitError):
    """Rendered output could not be written."""


class SerializationError(FountainKitError):
    """A document could not be encoded, or data could not be decoded into one."""


# Keys people write for a setting, mapped to the setting's real name
MISSPELLED_KEYS = {
    "width": "wrap_width",
    "css": "css_path",
    "page": "html_page",
    "notes": "show_notes",
}


def check_config_keys(config: dict[str, Any]) -> None:
    """Reject config mappings that use a known misspelled key.

    Raises:
        ConfigurationError: Naming the key to use instead
    """
    for wrong, correct in MISSPELLED_KEYS.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
