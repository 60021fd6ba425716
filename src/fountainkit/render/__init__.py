"""Renderers for parsed Fountain documents."""

from fountainkit.render.html import HTMLRenderer, render_html
from fountainkit.render.options import RenderOptions
from fountainkit.render.serialize import (
    DocumentRecord,
    ElementRecord,
    SerializationFormat,
    dumps,
    from_record,
    loads,
    to_record,
)
from fountainkit.render.text import TextRenderer, describe, render_text

__all__ = [
    "DocumentRecord",
    "ElementRecord",
    "HTMLRenderer",
    "RenderOptions",
    "SerializationFormat",
    "TextRenderer",
    "describe",
    "dumps",
    "from_record",
    "loads",
    "render_html",
    "render_text",
    "to_record",
]
