"""fountainkit: parse and render Fountain screenplays."""

from fountainkit.exceptions import (
    FountainKitError,
    ParseError,
    RenderError,
    SerializationError,
)
from fountainkit.parser import (
    Document,
    Element,
    ElementType,
    FountainParser,
    character_name,
    parse,
    parse_file,
)
from fountainkit.render import (
    RenderOptions,
    dumps,
    loads,
    render_html,
    render_text,
)

__version__ = "0.1.0"
__author__ = "fountainkit contributors"

__all__ = [
    "Document",
    "Element",
    "ElementType",
    "FountainKitError",
    "FountainParser",
    "ParseError",
    "RenderError",
    "RenderOptions",
    "SerializationError",
    "__version__",
    "character_name",
    "dumps",
    "loads",
    "parse",
    "parse_file",
    "render_html",
    "render_text",
]
