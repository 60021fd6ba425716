"""Stylesheet for rendered HTML screenplays."""

from __future__ import annotations

from pathlib import Path

from fountainkit.config import get_logger

logger = get_logger(__name__)

# Scrippet-style layout in the spirit of the fountain.io scrippets.css
DEFAULT_CSS = """\
section.fountain {
  max-width: 40em;
  margin: 2.5em 0;
  padding: 5px 14px 15px 14px;
  clear: both;
  color: #000000;
  background: #fffffc;
  border: 1px solid #d2d2d2;
  border-radius: 3px;
  box-shadow: 1px 1px 5px rgba(0, 0, 0, 0.1);
}

section.title-page,
section.script {
  width: 36em;
  padding: 2em 0 2em 1em;
  margin-bottom: 2em;
}

section.title-page {
  border-bottom: 1px solid #d2d2d2;
}

.title {
  text-align: center;
  text-transform: uppercase;
  text-decoration: underline;
  margin: 12em 33% 1em 33%;
}

.author {
  text-align: center;
  margin: 0 33%;
}

.draft-date,
.date {
  text-align: center;
  margin: 0 33% 6em 33%;
}

.copyright,
.contact,
.title-page-field {
  display: block;
  margin: 0;
  padding: 0;
  text-align: left;
}

.scene-heading,
.action,
.character,
.parenthetical,
.dialogue,
.transition,
.lyric,
.general-text {
  display: block;
  font: 12px/14px Courier, "Courier New", monospace;
  letter-spacing: 0;
  margin-top: 0;
  margin-bottom: 0;
}

.scene-heading,
.action,
.character {
  padding-top: 1.5ex;
}

.scene-heading {
  font-weight: bold;
  text-transform: uppercase;
}

.action {
  padding-right: 5%;
}

.character {
  padding-left: 40%;
  text-transform: uppercase;
}

.dialogue {
  padding-left: 20%;
  padding-right: 20%;
}

.parenthetical {
  padding-left: 32%;
  padding-right: 30%;
}

.lyric {
  font-style: italic;
  padding-left: 20%;
}

.transition {
  padding-top: 1.5ex;
  text-transform: uppercase;
}

.transition.left-align {
  text-align: left;
}

.transition.centered {
  text-align: center;
}

.transition.right-align {
  text-align: right;
  padding-right: 2em;
}

.section,
.synopsis,
.note {
  color: #777777;
  font-style: italic;
}

.empty,
.boneyard {
  display: none;
  height: 0;
}

hr.page-feed {
  border: none;
  border-top: 1px dashed #d2d2d2;
  margin: 2em 0;
}
"""


def load_stylesheet(css_path: Path | str | None) -> str:
    """Return the stylesheet at ``css_path``, or the built-in default.

    A missing or unreadable file is not an error: a warning is logged and
    the default stylesheet is returned.
    """
    if css_path is None:
        return DEFAULT_CSS

    path = Path(css_path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(
            "Stylesheet unavailable, using default",
            path=str(path),
            error=str(e),
        )
    return DEFAULT_CSS
