"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from fountainkit.config import FountainKitSettings, reset_settings, set_settings
from fountainkit.parser import FountainParser

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import cli_invoke, clean_runner  # noqa: F401

SAMPLE_SCRIPT = """\
Title: Brick & Steel
Credit: Written by
Author: Stu Maschwitz
Draft date: 1/20/2012

EXT. BRICK'S PATIO - DAY

A gorgeous day. The sun is shining.

STEEL (O.S.)
Beer's ready!

BRICK
(calling out)
Are they cold?

CUT TO:

INT. GARAGE - NIGHT

Steel cracks a beer.

THE END
"""


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path, monkeypatch):
    """Run every test with fresh settings and no FOUNTAINKIT_* variables.

    The CLI writes log level variables into os.environ; setting each one
    through monkeypatch first makes teardown remove them again.
    """
    for var in [k for k in os.environ if k.startswith("FOUNTAINKIT_")]:
        monkeypatch.delenv(var)
    for var in ("FOUNTAINKIT_LOG_LEVEL", "FOUNTAINKIT_DEBUG"):
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)

    # Keep project config files and .env in the checkout out of the tests
    monkeypatch.chdir(tmp_path)

    reset_settings()
    set_settings(FountainKitSettings())

    yield

    reset_settings()


@pytest.fixture
def parser():
    """A fresh FountainParser."""
    return FountainParser()


@pytest.fixture
def sample_script() -> str:
    """Short screenplay with a title page, dialogue and an end marker."""
    return SAMPLE_SCRIPT


@pytest.fixture
def sample_file(tmp_path) -> Path:
    """The sample screenplay written to a .fountain file."""
    path = tmp_path / "brick_and_steel.fountain"
    path.write_text(SAMPLE_SCRIPT, encoding="utf-8")
    return path
