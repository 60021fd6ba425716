"""HTML rendering of Fountain documents."""

from __future__ import annotations

import html
import re

from fountainkit.config import get_logger
from fountainkit.parser.fountain_models import (
    Document,
    Element,
    ElementType,
    Style,
    title_lines,
)
from fountainkit.render.css import load_stylesheet
from fountainkit.render.options import RenderOptions
from fountainkit.render.text import transition_alignment, transition_text

logger = get_logger(__name__)

DEFAULT_PAGE_TITLE = "Screenplay"
TITLE_PAGE_FIELD_CLASS = "title-page-field"

TITLE_PAGE_CLASSES = {
    "title": "title",
    "author": "author",
    "authors": "author",
    "draft-date": "draft-date",
    "date": "date",
    "copyright": "copyright",
    "contact": "contact",
}

STYLE_TAGS = {
    Style.BOLD: "strong",
    Style.ITALIC: "em",
    Style.UNDERLINE: "u",
}

# Escaped markers are swapped for private-use characters while emphasis runs
_ESCAPES = {"\\*": "\ue000", "\\_": "\ue001"}

_EMPHASIS_PATTERNS: tuple[tuple[re.Pattern[str], tuple[Style, ...]], ...] = (
    (re.compile(r"\*\*\*(?=\S)(.+?)(?<=\S)\*\*\*"), (Style.BOLD, Style.ITALIC)),
    (re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*"), (Style.BOLD,)),
    (re.compile(r"\*(?=\S)(.+?)(?<=\S)\*"), (Style.ITALIC,)),
    (re.compile(r"(?<![^\W_])_(?=\S)(.+?)(?<=\S)_(?![^\W_])"), (Style.UNDERLINE,)),
)


def _wrap_tags(text: str, styles: tuple[Style, ...]) -> str:
    opening = "".join(f"<{STYLE_TAGS[style]}>" for style in styles)
    closing = "".join(f"</{STYLE_TAGS[style]}>" for style in reversed(styles))
    return f"{opening}{text}{closing}"


def emphasize(line: str) -> str:
    """Escape one line of text and convert Fountain emphasis to HTML tags.

    ``***bold italic***``, ``**bold**``, ``*italic*`` and ``_underline_``
    are recognized; ``\\*`` and ``\\_`` stay literal.
    """
    text = html.escape(line, quote=False)
    for marker, placeholder in _ESCAPES.items():
        text = text.replace(marker, placeholder)
    for pattern, styles in _EMPHASIS_PATTERNS:
        text = pattern.sub(
            lambda match, styles=styles: _wrap_tags(match.group(1), styles), text
        )
    for marker, placeholder in _ESCAPES.items():
        text = text.replace(placeholder, marker[1])
    return text


def title_page_class(name: str | None) -> str:
    """CSS class for a title page entry, keyed on its normalized name."""
    if not name:
        return TITLE_PAGE_FIELD_CLASS
    key = "-".join(name.strip().lower().split())
    return TITLE_PAGE_CLASSES.get(key, TITLE_PAGE_FIELD_CLASS)


class HTMLRenderer:
    """Render a Document to HTML blocks with CSS class hints.

    Each element becomes one ``<p>`` whose class is the element type in
    kebab case. The result is a ``section.fountain`` fragment, or a full
    page when ``options.html_page`` is set.
    """

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.options = options or RenderOptions()

    def render(self, document: Document) -> str:
        """Render the document; the result has no trailing newline."""
        fragment = self.render_fragment(document)
        stylesheet = self.render_stylesheet()

        if not self.options.html_page:
            parts = [stylesheet, fragment] if stylesheet else [fragment]
            return "\n".join(parts)

        title = " ".join((document.title or "").split()) or DEFAULT_PAGE_TITLE
        head = [
            '<meta charset="utf-8">',
            f"<title>{html.escape(title)}</title>",
        ]
        if stylesheet:
            head.append(stylesheet)
        return "\n".join(
            [
                "<!DOCTYPE html>",
                "<html>",
                "<head>",
                *head,
                "</head>",
                "<body>",
                fragment,
                "</body>",
                "</html>",
            ]
        )

    def render_fragment(self, document: Document) -> str:
        lines = ['<section class="fountain">']
        if document.title_page:
            lines.append('<section class="title-page">')
            lines.extend(
                self.render_title_entry(entry) for entry in document.title_page
            )
            lines.append("</section>")

        lines.append('<section class="script">')
        for element in document.elements:
            block = self.render_element(element)
            if block is not None:
                lines.append(block)
        lines.append("</section>")
        lines.append("</section>")

        logger.debug(
            "Rendered html",
            title_page_entries=len(document.title_page),
            elements=len(document.elements),
            page=self.options.html_page,
        )
        return "\n".join(lines)

    def render_stylesheet(self) -> str:
        """Inline ``<style>`` and/or ``<link>`` markup for the options."""
        parts: list[str] = []
        if self.options.inline_css:
            css = load_stylesheet(self.options.css_path)
            parts.append(f"<style>\n{css.rstrip()}\n</style>")
        if self.options.link_css:
            href = html.escape(self.options.css_path.as_posix())
            parts.append(f'<link rel="stylesheet" href="{href}">')
        return "\n".join(parts)

    def render_title_entry(self, entry: Element) -> str:
        return self._block(
            title_page_class(entry.name), "\n".join(title_lines(entry.content))
        )

    def render_element(self, element: Element) -> str | None:
        """Render one body element, or None when it is hidden."""
        element_type = element.type
        if not self.options.shows(element_type):
            return None
        if element_type is ElementType.PAGE_FEED:
            return '<hr class="page-feed">'
        if element_type is ElementType.TITLE_PAGE:
            return self.render_title_entry(element)
        if element_type is ElementType.TRANSITION:
            text = element.content.strip()
            alignment = transition_alignment(text)
            return self._block(
                f"{element_type.css_class} {alignment.value}",
                transition_text(text, alignment),
            )
        return self._block(element_type.css_class, element.content)

    def _block(self, css_class: str, content: str) -> str:
        body = "<br>".join(emphasize(line) for line in content.split("\n"))
        return f'<p class="{css_class}">{body}</p>'


def render_html(document: Document, options: RenderOptions | None = None) -> str:
    """Render a document to HTML."""
    return HTMLRenderer(options).render(document)

