"""Line classification for Fountain screenplays.

Every line is typed from its own text plus the type of the line before it.
Predicates run in a fixed priority order and the first match wins; the order
is part of the output format, so reordering ``CLASSIFICATION_RULES`` changes
what documents parse to.

Character cues cannot see the following line. A cue that is not followed by
dialogue is misclassified here and corrected afterwards by the document
builder.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from fountainkit.parser.fountain_models import ElementType
from fountainkit.utils.screenplay import ScreenplayUtils

PAGE_FEED_MARKER = "==="

SCENE_MARKERS = frozenset({"FADE IN:"}) | ScreenplayUtils.END_MARKERS

# INT, EXT, INT./EXT, INT/EXT, I/E as a leading word
SCENE_PREFIX = re.compile(r"^(?:INT|EXT|I/E)(?:[./\s]|$)", re.IGNORECASE)
FORCED_SCENE = re.compile(r"^\.(?!\.)")
SCENE_NUMBER = re.compile(r"#[\w.\-]+#$")

CHARACTER_EXCLUDED_PREFIXES = ("INT.", "EXT.")
CHARACTER_EXCLUDED_SUFFIXES = ("ANGLE", "SHOT", "P.O.V.", ":")

Predicate = Callable[[str, ElementType, bool], bool]


def _is_upper(text: str) -> bool:
    """True when text has letters and none of them are lower case."""
    return any(c.isalpha() for c in text) and text == text.upper()


def is_page_feed(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    """Page break sentinel line."""
    return line.strip() == PAGE_FEED_MARKER


def is_title_page(
    line: str, prev_type: ElementType, block_open: bool = False
) -> bool:
    """Still inside the title page: previous line was title page and this
    line does not open the script body."""
    return (
        prev_type is ElementType.TITLE_PAGE
        and not is_scene_heading(line, prev_type)
        and not is_transition(line, prev_type)
    )


def is_section(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    return line.strip().startswith("#")


def is_synopsis(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    text = line.strip()
    return text.startswith("=") and text != PAGE_FEED_MARKER


def is_note(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    """Note on one line, or the start, middle or end of a multi-line note.

    Notes may span several lines but never a blank line.
    """
    text = line.strip()
    if not text:
        return False
    if text.startswith("[["):
        return True
    if prev_type is ElementType.NOTE:
        return text.endswith("]]") or block_open
    return False


def is_lyric(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    text = line.strip()
    return text.startswith("~") and not text.endswith("~")


def is_scene_heading(
    line: str, prev_type: ElementType, block_open: bool = False
) -> bool:
    """Scene heading cues, matched without regard to case.

    A leading ``.``, an INT/EXT style prefix, a trailing ``#n#`` scene number,
    a dash preceded by a space or one of the canonical markers.
    """
    text = line.strip()
    if not text or text.startswith("!"):
        return False
    if text.upper() in SCENE_MARKERS:
        return True
    if FORCED_SCENE.match(text) or SCENE_PREFIX.match(text):
        return True
    return bool(SCENE_NUMBER.search(text)) or " -" in text


def is_action(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    """Forced action, or any non-blank line nothing more specific claims."""
    text = line.strip()
    if text.startswith("!"):
        return True
    if not text:
        return False
    return not any(
        predicate(line, prev_type, block_open)
        for predicate in (
            is_transition,
            is_character,
            is_parenthetical,
            is_dialogue,
            is_boneyard,
        )
    )


def is_transition(
    line: str, prev_type: ElementType, block_open: bool = False
) -> bool:
    text = line.strip()
    if text.startswith(">"):
        return True
    if not _is_upper(text):
        return False
    return (
        text.endswith(("TO:", "IN:"))
        or text.startswith("FADE TO")
        or "THE END" in text
    )


def is_character(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    """Forced ``@`` cue, or an upper-case line after a blank line.

    Camera directions, sluglines, quoted lines and lines containing a double
    dash are not character cues.
    """
    text = line.strip()
    if text.startswith("@"):
        return True
    if prev_type is not ElementType.EMPTY or not _is_upper(text):
        return False
    if "--" in text:
        return False
    upper = text.upper()
    if upper.startswith(CHARACTER_EXCLUDED_PREFIXES):
        return False
    if upper.endswith(CHARACTER_EXCLUDED_SUFFIXES):
        return False
    return not ScreenplayUtils.is_quoted(text)


def is_parenthetical(
    line: str, prev_type: ElementType, block_open: bool = False
) -> bool:
    text = line.strip()
    return (
        text.startswith("(")
        and ")" in text
        and prev_type in (ElementType.CHARACTER, ElementType.DIALOGUE)
    )


def is_dialogue(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    return bool(line.strip()) and prev_type in (
        ElementType.CHARACTER,
        ElementType.PARENTHETICAL,
    )


def is_boneyard(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    """``/* ... */`` on one line, or the start, middle or end of a block."""
    text = line.strip()
    if text.startswith("/*"):
        return True
    if prev_type is ElementType.BONEYARD:
        return text.endswith("*/") or block_open
    return False


def is_empty(line: str, prev_type: ElementType, block_open: bool = False) -> bool:
    return not line.strip()


CLASSIFICATION_RULES: tuple[tuple[ElementType, Predicate], ...] = (
    (ElementType.PAGE_FEED, is_page_feed),
    (ElementType.TITLE_PAGE, is_title_page),
    (ElementType.SECTION, is_section),
    (ElementType.SYNOPSIS, is_synopsis),
    (ElementType.NOTE, is_note),
    (ElementType.LYRIC, is_lyric),
    (ElementType.SCENE_HEADING, is_scene_heading),
    (ElementType.ACTION, is_action),
    (ElementType.TRANSITION, is_transition),
    (ElementType.CHARACTER, is_character),
    (ElementType.PARENTHETICAL, is_parenthetical),
    (ElementType.DIALOGUE, is_dialogue),
    (ElementType.BONEYARD, is_boneyard),
    (ElementType.EMPTY, is_empty),
)


def classify_line(
    line: str, prev_type: ElementType, block_open: bool = False
) -> ElementType:
    """Assign an element type to a line.

    Args:
        line: Raw source line without its line terminator
        prev_type: Type assigned to the previous line (TITLE_PAGE for the first)
        block_open: The previous line belongs to a Note or Boneyard block
            that has not been closed yet

    Returns:
        The first matching type, GENERAL_TEXT when nothing matches
    """
    # An open boneyard swallows everything up to its closing marker
    if block_open and prev_type is ElementType.BONEYARD:
        return ElementType.BONEYARD

    for element_type, predicate in CLASSIFICATION_RULES:
        if predicate(line, prev_type, block_open):
            return element_type
    return ElementType.GENERAL_TEXT


def _block_markers(element_type: ElementType) -> tuple[str, str] | None:
    if element_type is ElementType.NOTE:
        return "[[", "]]"
    if element_type is ElementType.BONEYARD:
        return "/*", "*/"
    return None


def block_open_after(
    line: str, element_type: ElementType, was_open: bool = False
) -> bool:
    """Whether a Note or Boneyard block is still open after this line.

    Args:
        line: The line just classified
        element_type: Its type
        was_open: A block of the same type was open before this line

    Returns:
        True if the block continues onto the next line
    """
    markers = _block_markers(element_type)
    if markers is None:
        return False
    opener, closer = markers
    last_open = line.rfind(opener)
    last_close = line.rfind(closer)
    if last_open > last_close:
        return True
    if last_close >= 0:
        return False
    return was_open
