"""Immutable rendering options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from fountainkit.parser.fountain_models import ElementType

if TYPE_CHECKING:
    from fountainkit.config.settings import FountainKitSettings

DEFAULT_WRAP_WIDTH = 64
DEFAULT_CSS_PATH = Path("fountain.css")


@dataclass(frozen=True)
class RenderOptions:
    """Options threaded explicitly through every render call.

    Renderers never consult global settings; build one of these at the
    boundary with ``from_settings`` and pass it along.
    """

    wrap_width: int = DEFAULT_WRAP_WIDTH
    show_section: bool = False
    show_synopsis: bool = False
    show_notes: bool = False
    html_page: bool = False
    inline_css: bool = False
    link_css: bool = False
    css_path: Path = DEFAULT_CSS_PATH
    pretty: bool = False
    type_names: bool = False

    def __post_init__(self) -> None:
        if self.wrap_width < 1:
            raise ValueError(f"wrap_width must be positive, got {self.wrap_width}")
        if not isinstance(self.css_path, Path):
            object.__setattr__(self, "css_path", Path(self.css_path))

    def shows(self, element_type: ElementType) -> bool:
        """Whether elements of this type appear in rendered output."""
        if element_type is ElementType.SECTION:
            return self.show_section
        if element_type is ElementType.SYNOPSIS:
            return self.show_synopsis
        if element_type is ElementType.NOTE:
            return self.show_notes
        return True

    @classmethod
    def from_settings(cls, settings: FountainKitSettings) -> RenderOptions:
        """Snapshot the rendering fields of a settings object."""
        return cls(
            wrap_width=settings.wrap_width,
            show_section=settings.show_section,
            show_synopsis=settings.show_synopsis,
            show_notes=settings.show_notes,
            html_page=settings.html_page,
            inline_css=settings.inline_css,
            link_css=settings.link_css,
            css_path=Path(settings.css_path),
            pretty=settings.pretty,
            type_names=settings.type_names,
        )
