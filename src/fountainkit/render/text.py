"""Plain text rendering of Fountain documents."""

from __future__ import annotations

import textwrap

from fountainkit.config import get_logger
from fountainkit.parser.fountain_models import (
    Alignment,
    Document,
    Element,
    ElementType,
)
from fountainkit.render.options import RenderOptions

logger = get_logger(__name__)

INDENT = "\t"
# Columns one indent unit occupies when budgeting wrapped dialogue
TAB_WIDTH = 8

CHARACTER_INDENT = 4
PARENTHETICAL_INDENT = 3
DIALOGUE_INDENT = 2

PAGE_FEED = "\f"


def wrap(text: str, width: int) -> list[str]:
    """Greedy word wrap of one source line.

    Words are never split; a word longer than ``width`` gets a line of its
    own. A blank line wraps to a single empty line.
    """
    return (
        textwrap.wrap(
            text,
            width=max(width, 1),
            break_long_words=False,
            break_on_hyphens=False,
        )
        or [""]
    )


def transition_alignment(text: str) -> Alignment:
    """Alignment of a trimmed transition: ``.`` or ``IN:`` endings stay left,
    ``>...<`` is centered, everything else goes to the right margin."""
    if text.endswith((".", "IN:")):
        return Alignment.LEFT
    if len(text) > 1 and text.startswith(">") and text.endswith("<"):
        return Alignment.CENTER
    return Alignment.RIGHT


def transition_text(text: str, alignment: Alignment) -> str:
    """Strip the forced markers a transition carries for its alignment."""
    if alignment is Alignment.CENTER:
        return text[1:-1].strip().upper()
    if alignment is Alignment.RIGHT:
        return text.lstrip(">").strip().upper()
    return text


class TextRenderer:
    """Render a Document back to formatted plain text.

    Character cues, parentheticals and dialogue are indented with tabs.
    Action and dialogue are word wrapped at ``options.wrap_width``.
    """

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.options = options or RenderOptions()

    def render(self, document: Document) -> str:
        """Render the document; the result has no trailing newline."""
        parts: list[str] = []
        if document.title_page:
            parts.extend(str(entry) for entry in document.title_page)
            parts.append("")

        for element in document.elements:
            rendered = self.render_element(element)
            if rendered is not None:
                parts.append(rendered)

        logger.debug(
            "Rendered text",
            elements=len(document.elements),
            width=self.options.wrap_width,
        )
        return "\n".join(parts)

    def render_element(self, element: Element) -> str | None:
        """Render one element, or None when it is hidden."""
        options = self.options
        content = element.content

        element_type = element.type
        if element_type is ElementType.TITLE_PAGE:
            return str(element)
        if element_type is ElementType.SCENE_HEADING:
            return content.strip().upper()
        if element_type is ElementType.ACTION:
            return self._wrap_lines(content, options.wrap_width)
        if element_type is ElementType.CHARACTER:
            return INDENT * CHARACTER_INDENT + content.strip().upper()
        if element_type is ElementType.PARENTHETICAL:
            return INDENT * PARENTHETICAL_INDENT + content.strip()
        if element_type is ElementType.DIALOGUE:
            return self._dialogue(content)
        if element_type is ElementType.TRANSITION:
            return self._transition(content)
        if element_type is ElementType.PAGE_FEED:
            return PAGE_FEED
        if not options.shows(element_type):
            return None
        return content

    def _wrap_lines(self, content: str, width: int, prefix: str = "") -> str:
        lines: list[str] = []
        for source_line in content.split("\n"):
            lines.extend(prefix + line for line in wrap(source_line, width))
        return "\n".join(lines)

    def _dialogue(self, content: str) -> str:
        width = self.options.wrap_width
        # Indent tabs are dropped when they leave no column for text
        tabs = max(min(DIALOGUE_INDENT, (width - 1) // TAB_WIDTH), 0)
        return self._wrap_lines(content, width - tabs * TAB_WIDTH, INDENT * tabs)

    def _transition(self, content: str) -> str:
        text = content.strip()
        alignment = transition_alignment(text)
        text = transition_text(text, alignment)
        if alignment is Alignment.CENTER:
            return text.center(self.options.wrap_width).rstrip()
        if alignment is Alignment.RIGHT:
            return text.rjust(self.options.wrap_width)
        return text


def render_text(document: Document, options: RenderOptions | None = None) -> str:
    """Render a document to plain text."""
    return TextRenderer(options).render(document)


def describe(document: Document) -> str:
    """Debug listing, one ``index type repr(content)`` line per element."""
    entries = [*document.title_page, *document.elements]
    return "\n".join(
        f"{index} {element.type.value} {element.content!r}"
        for index, element in enumerate(entries)
    )
