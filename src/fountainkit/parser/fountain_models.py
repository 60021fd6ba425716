"""Data models for Fountain screenplay documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from fountainkit.utils.screenplay import ScreenplayUtils

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ElementType(IntEnum):
    """Semantic type assigned to every classified line.

    Integer values are stable; they are the ``type`` of the integer
    serialization.
    """

    TITLE_PAGE = 1
    EMPTY = 2
    SCENE_HEADING = 3
    ACTION = 4
    CHARACTER = 5
    DIALOGUE = 6
    PARENTHETICAL = 7
    TRANSITION = 8
    LYRIC = 9
    NOTE = 10
    BONEYARD = 11
    SECTION = 12
    SYNOPSIS = 13
    PAGE_FEED = 14
    GENERAL_TEXT = 15

    @property
    def type_name(self) -> str:
        """CamelCase name, e.g. ``SceneHeading``."""
        return self.name.title().replace("_", "")

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. ``Scene Heading``."""
        return self.name.replace("_", " ").title()

    @property
    def css_class(self) -> str:
        """Lower-kebab-case class name, e.g. ``scene-heading``."""
        return _CAMEL_BOUNDARY.sub("-", self.type_name).lower()

    @classmethod
    def from_name(cls, value: str) -> ElementType:
        """Look up a type by member, CamelCase, display or kebab name.

        Raises:
            ValueError: If no member matches.
        """
        key = re.sub(r"[\s_-]", "", value).lower()
        for member in cls:
            if member.type_name.lower() == key:
                return member
        raise ValueError(f"Unknown element type: {value!r}")


class Alignment(str, Enum):
    """Alignment tags used while rendering transitions."""

    CENTER = "centered"
    LEFT = "left-align"
    RIGHT = "right-align"


class Style(str, Enum):
    """Inline emphasis tags used while rendering HTML."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"


@dataclass(frozen=True)
class Element:
    """One classified unit of a screenplay.

    ``content`` holds one or more source lines joined by ``\\n``; ``name`` is
    only set for title page entries.
    """

    type: ElementType
    content: str
    name: str | None = None

    def __str__(self) -> str:
        if self.type is not ElementType.TITLE_PAGE:
            return self.content
        value = self.content.lstrip(" \t")
        separator = " " if value[:1] not in ("", "\n") else ""
        return f"{self.name}:{separator}{value}"


def title_lines(content: str) -> list[str]:
    """Trimmed, non-blank lines of a title page value."""
    return [line.strip() for line in content.split("\n") if line.strip()]


def character_name(element: Element) -> str:
    """Return the cleaned character name for a Character element.

    Raises:
        ValueError: If the element is not a Character element.
    """
    if element.type is not ElementType.CHARACTER:
        raise ValueError(
            f"Expected a Character element, got {element.type.display_name}"
        )
    return ScreenplayUtils.extract_character_name(element.content)


@dataclass(frozen=True)
class Document:
    """A parsed screenplay: title page entries followed by body elements."""

    title_page: tuple[Element, ...] = field(default_factory=tuple)
    elements: tuple[Element, ...] = field(default_factory=tuple)

    def title_value(self, key: str) -> str | None:
        """Return the first title page value whose key matches, ignoring case.

        The value is trimmed line by line and blank lines are dropped.
        """
        wanted = key.strip().lower()
        for entry in self.title_page:
            if entry.name is not None and entry.name.strip().lower() == wanted:
                return "\n".join(title_lines(entry.content))
        return None

    @property
    def title(self) -> str | None:
        """Title page ``Title`` value."""
        return self.title_value("title")

    @property
    def author(self) -> str | None:
        """Author, checking the common author key variations."""
        for key in ("author", "authors", "writer", "writers", "written by"):
            value = self.title_value(key)
            if value is not None:
                return value
        return None

    def elements_of_type(self, element_type: ElementType) -> list[Element]:
        """All body elements of the given type, in document order."""
        return [e for e in self.elements if e.type is element_type]

    def character_names(self) -> list[str]:
        """Unique cleaned character names in order of first appearance."""
        names: list[str] = []
        for element in self.elements_of_type(ElementType.CHARACTER):
            name = character_name(element)
            if name and name not in names:
                names.append(name)
        return names
