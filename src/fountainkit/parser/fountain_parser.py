"""Build Fountain documents from classified screenplay lines."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from fountainkit.config import get_logger
from fountainkit.exceptions import FountainFileNotFoundError, ParseError
from fountainkit.parser.classifier import block_open_after, classify_line
from fountainkit.parser.fountain_models import Document, Element, ElementType
from fountainkit.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)

UNKNOWN_TITLE_KEY = "Unknown"

# Types that confirm the Character cue before them
CHARACTER_FOLLOWERS = frozenset({ElementType.DIALOGUE, ElementType.PARENTHETICAL})


def split_lines(text: str) -> list[str]:
    """Split text on newlines, dropping carriage returns and the empty
    segment after a trailing newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass
class _Run:
    """Pending run of same-typed lines not yet flushed into an Element."""

    type: ElementType
    lines: list[str] = field(default_factory=list)

    def to_element(self) -> Element:
        return Element(type=self.type, content="\n".join(self.lines))


@dataclass
class _TitleEntry:
    name: str
    lines: list[str]

    def to_element(self) -> Element:
        return Element(
            type=ElementType.TITLE_PAGE,
            name=self.name,
            content="\n".join(self.lines),
        )


class FountainParser:
    """Parse Fountain screenplay text into a Document.

    Lines are classified one at a time against the previous line's type.
    Consecutive lines of the same type are merged into one element, title
    page lines are collected as key/value entries, and once an end-of-script
    marker is seen every remaining line is kept as general text. A final pass
    downgrades Character cues that turned out not to introduce dialogue.
    """

    def parse(self, src: bytes | str) -> Document:
        """Parse Fountain content into a Document.

        Args:
            src: Raw Fountain text, bytes are decoded as UTF-8

        Returns:
            The parsed Document

        Raises:
            ParseError: If bytes are not valid UTF-8
        """
        if isinstance(src, bytes):
            try:
                src = src.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ParseError(
                    message="Screenplay source is not valid UTF-8",
                    hint="Re-save the file with UTF-8 encoding.",
                    details={"position": e.start, "reason": e.reason},
                ) from e
        elif src.startswith("\ufeff"):
            src = src[1:]
        return self.parse_lines(split_lines(src))

    def parse_file(self, file_path: Path | str) -> Document:
        """Parse a Fountain file.

        Args:
            file_path: Path to the Fountain file

        Returns:
            The parsed Document

        Raises:
            FountainFileNotFoundError: If the file does not exist
            ParseError: If the file cannot be read or decoded
        """
        file_path = Path(file_path)
        logger.debug("Parsing fountain file", path=str(file_path))
        try:
            data = file_path.read_bytes()
        except FileNotFoundError as e:
            raise FountainFileNotFoundError(
                message=f"Fountain file not found: {file_path}",
                hint="Check that the file path is correct.",
                details={"file": str(file_path)},
            ) from e
        except OSError as e:
            raise ParseError(
                message=f"Failed to read Fountain file: {file_path}",
                hint="Check file permissions.",
                details={"file": str(file_path), "error": str(e)},
            ) from e
        return self.parse(data)

    def parse_stream(self, stream: IO[bytes] | IO[str]) -> Document:
        """Parse everything readable from an open stream.

        Raises:
            ParseError: If reading the stream fails
        """
        try:
            data = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(
                message="Failed to read screenplay stream",
                hint="Check that the source is readable UTF-8 text.",
                details={"error": str(e)},
            ) from e
        return self.parse(data)

    def parse_lines(self, lines: Iterable[str]) -> Document:
        """Build a Document from a sequence of lines.

        Args:
            lines: Source lines without line terminators

        Returns:
            The parsed Document

        Raises:
            ParseError: If iterating the line source fails
        """
        title_page: list[_TitleEntry] = []
        elements: list[Element] = []
        run: _Run | None = None

        prev_type = ElementType.TITLE_PAGE
        block_open = False
        end_of_script = False
        line_count = 0

        for line in self._read(lines):
            line_count += 1

            if end_of_script:
                current_type = ElementType.GENERAL_TEXT
            else:
                current_type = classify_line(line, prev_type, block_open)
                block_open = block_open_after(
                    line, current_type, block_open and current_type is prev_type
                )

            if current_type is ElementType.TITLE_PAGE:
                self._add_title_line(title_page, line)
            else:
                if run is None or run.type is not current_type:
                    if run is not None:
                        elements.append(run.to_element())
                    run = _Run(current_type)
                run.lines.append(line)

            if (
                current_type is ElementType.SCENE_HEADING
                and ScreenplayUtils.is_end_marker(line)
            ):
                end_of_script = True
                logger.info("End of script marker found", line_number=line_count)

            prev_type = current_type

        if run is not None:
            elements.append(run.to_element())

        document = Document(
            title_page=tuple(entry.to_element() for entry in title_page),
            elements=tuple(self._merge_runs(self._confirm_characters(elements))),
        )
        logger.debug(
            "Parsed fountain document",
            lines=line_count,
            title_page_entries=len(document.title_page),
            elements=len(document.elements),
        )
        return document

    def _read(self, lines: Iterable[str]) -> Iterator[str]:
        """Iterate lines, turning I/O failures into ParseError."""
        iterator = iter(lines)
        while True:
            try:
                line = next(iterator)
            except StopIteration:
                return
            except (OSError, UnicodeDecodeError) as e:
                raise ParseError(
                    message="Failed to read screenplay lines",
                    hint="Check that the source is readable UTF-8 text.",
                    details={"error": str(e)},
                ) from e
            yield line.rstrip("\r\n")

    def _add_title_line(self, title_page: list[_TitleEntry], line: str) -> None:
        """Start a new title page entry on ``key:value``, otherwise append the
        line to the last entry. Text is kept exactly as written."""
        if ":" in line:
            name, value = line.split(":", 1)
            title_page.append(_TitleEntry(name=name, lines=[value]))
        elif title_page:
            title_page[-1].lines.append(line)
        else:
            title_page.append(_TitleEntry(name=UNKNOWN_TITLE_KEY, lines=[line]))

    def _confirm_characters(self, elements: list[Element]) -> list[Element]:
        """Downgrade Character cues after a blank line that are not followed
        by dialogue or a parenthetical."""
        confirmed: list[Element] = []
        for index, element in enumerate(elements):
            if (
                element.type is ElementType.CHARACTER
                and index > 0
                and elements[index - 1].type is ElementType.EMPTY
            ):
                following = elements[index + 1] if index + 1 < len(elements) else None
                if following is None or following.type not in CHARACTER_FOLLOWERS:
                    logger.debug(
                        "Character cue without dialogue kept as text",
                        content=element.content,
                        index=index,
                    )
                    element = Element(
                        type=ElementType.GENERAL_TEXT, content=element.content
                    )
            confirmed.append(element)
        return confirmed

    def _merge_runs(self, elements: list[Element]) -> Iterator[Element]:
        """Join neighbours that share a type."""
        pending: Element | None = None
        for element in elements:
            if pending is not None and pending.type is element.type:
                pending = Element(
                    type=pending.type,
                    content=f"{pending.content}\n{element.content}",
                )
                continue
            if pending is not None:
                yield pending
            pending = element
        if pending is not None:
            yield pending


def parse(src: bytes | str) -> Document:
    """Parse Fountain content with a default parser."""
    return FountainParser().parse(src)


def parse_file(file_path: Path | str) -> Document:
    """Parse a Fountain file with a default parser."""
    return FountainParser().parse_file(file_path)
