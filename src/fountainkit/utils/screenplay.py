"""Screenplay-specific utility functions."""

from __future__ import annotations

import re


class ScreenplayUtils:
    """Utility functions for screenplay processing."""

    # Canonical end-of-script markers, compared trimmed and upper-cased
    END_MARKERS = frozenset({"THE END", "THE END.", "LA FIN", "LA FIN."})

    PARENTHESIZED_GROUP = re.compile(r"\([^()]*\)")
    POSSESSIVE_SUFFIX = re.compile(r"['’][sS]$")

    @staticmethod
    def is_end_marker(text: str) -> bool:
        """Check whether text is one of the canonical end-of-script markers."""
        return text.strip().upper() in ScreenplayUtils.END_MARKERS

    @staticmethod
    def is_quoted(text: str) -> bool:
        """Check whether text is fully wrapped in double quotation marks."""
        text = text.strip()
        return len(text) >= 2 and text[0] == '"' and text[-1] == '"'

    @staticmethod
    def is_parenthesized(text: str) -> bool:
        """Check whether text is fully wrapped in parentheses."""
        return text.startswith("(") and text.endswith(")")

    @staticmethod
    def extract_character_name(content: str) -> str:
        """Derive a clean character name from a character cue.

        Args:
            content: Character cue text (e.g., "JANE (O.S.)")

        Returns:
            The cleaned name, or an empty string for a quoted cue
        """
        text = content.strip()
        if text.startswith("@"):
            text = text[1:].strip()

        if ScreenplayUtils.is_quoted(text):
            return ""

        # Extensions like "(V.O. CONT'D)" span more than one token
        text = ScreenplayUtils.PARENTHESIZED_GROUP.sub(" ", text)

        tokens = []
        for token in text.split():
            if not token or ScreenplayUtils.is_parenthesized(token):
                continue
            token = ScreenplayUtils.POSSESSIVE_SUFFIX.sub("", token)
            if token:
                tokens.append(token)

        if len(tokens) > 1 and tokens[-1].upper() == "VOICE":
            tokens.pop()

        return " ".join(tokens)
