"""Fountain screenplay parsing."""

from fountainkit.parser.classifier import classify_line
from fountainkit.parser.fountain_models import (
    Alignment,
    Document,
    Element,
    ElementType,
    Style,
    character_name,
)
from fountainkit.parser.fountain_parser import FountainParser, parse, parse_file

__all__ = [
    "Alignment",
    "Document",
    "Element",
    "ElementType",
    "FountainParser",
    "Style",
    "character_name",
    "classify_line",
    "parse",
    "parse_file",
]
