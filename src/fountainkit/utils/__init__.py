"""Utility modules for fountainkit."""

from fountainkit.utils.screenplay import ScreenplayUtils

__all__ = [
    "ScreenplayUtils",
]
