"""Tests for Fountain line classification."""

import pytest

from fountainkit.parser.classifier import (
    CLASSIFICATION_RULES,
    block_open_after,
    classify_line,
    is_scene_heading,
)
from fountainkit.parser.fountain_models import ElementType

T = ElementType


class TestRuleOrder:
    """Test the fixed predicate priority."""

    def test_rule_order(self):
        """Rules are evaluated in the documented order."""
        assert [element_type for element_type, _ in CLASSIFICATION_RULES] == [
            T.PAGE_FEED,
            T.TITLE_PAGE,
            T.SECTION,
            T.SYNOPSIS,
            T.NOTE,
            T.LYRIC,
            T.SCENE_HEADING,
            T.ACTION,
            T.TRANSITION,
            T.CHARACTER,
            T.PARENTHETICAL,
            T.DIALOGUE,
            T.BONEYARD,
            T.EMPTY,
        ]

    def test_page_feed_beats_title_page(self):
        """The page feed sentinel wins even inside the title page."""
        assert classify_line("===", T.TITLE_PAGE) is T.PAGE_FEED

    def test_page_feed_is_not_synopsis(self):
        """=== is a page feed, a single = opens a synopsis."""
        assert classify_line("  ===  ", T.EMPTY) is T.PAGE_FEED
        assert classify_line("= The hero arrives", T.EMPTY) is T.SYNOPSIS

    def test_section_before_scene_heading(self):
        """A # line is a section even when it reads like a heading."""
        assert classify_line("# INT. HOUSE", T.EMPTY) is T.SECTION


class TestTitlePage:
    """Test title page continuation."""

    def test_key_value_line(self):
        """Key/value lines stay on the title page."""
        assert classify_line("Title: Big Fish", T.TITLE_PAGE) is T.TITLE_PAGE

    def test_blank_line_stays_on_title_page(self):
        """Blank lines do not end the title page."""
        assert classify_line("", T.TITLE_PAGE) is T.TITLE_PAGE

    def test_scene_heading_ends_title_page(self):
        """A scene heading opens the body."""
        assert classify_line("INT. HOUSE - DAY", T.TITLE_PAGE) is T.SCENE_HEADING

    def test_transition_ends_title_page(self):
        """A transition opens the body."""
        assert classify_line("FADE TO BLACK.", T.TITLE_PAGE) is T.TRANSITION

    def test_only_after_title_page(self):
        """Key/value lines outside the title page are ordinary text."""
        assert classify_line("Title: Big Fish", T.EMPTY) is T.ACTION


class TestSceneHeading:
    """Test scene heading cues."""

    @pytest.mark.parametrize(
        "line",
        [
            "INT. HOUSE - DAY",
            "EXT. BRICK'S PATIO - DAY",
            "INT./EXT. CAR - MOVING",
            "INT/EXT CAR",
            "I/E DOORWAY",
            "int. kitchen - night",
            ".FLASHBACK",
            "FADE IN:",
            "THE END",
            "the end.",
            "LA FIN",
            "La Fin.",
        ],
    )
    def test_strong_cues(self, line):
        """Prefixes, forced headings and canonical markers match anywhere."""
        assert classify_line(line, T.ACTION) is T.SCENE_HEADING

    def test_forced_action_is_never_a_heading(self):
        """A ! line is excluded from scene heading consideration."""
        assert not is_scene_heading("!INT. HOUSE - DAY", T.EMPTY)
        assert classify_line("!INT. HOUSE - DAY", T.EMPTY) is T.ACTION

    def test_ellipsis_is_not_forced(self):
        """A leading ellipsis does not force a heading."""
        assert classify_line("...and then silence.", T.EMPTY) is T.ACTION

    def test_interior_is_not_a_prefix(self):
        """INT must be a whole leading word."""
        assert classify_line("Interior designers argue.", T.EMPTY) is T.ACTION

    @pytest.mark.parametrize("prev", [T.EMPTY, T.ACTION, T.PAGE_FEED, T.CHARACTER])
    def test_scene_number(self, prev):
        """A trailing scene number marks a heading after any line."""
        assert classify_line("HOUSE #1A#", prev) is T.SCENE_HEADING
        assert classify_line("House #12#", prev) is T.SCENE_HEADING

    @pytest.mark.parametrize("prev", [T.EMPTY, T.ACTION, T.PAGE_FEED])
    @pytest.mark.parametrize(
        "line", ["HOUSE - DAY", "Kitchen - night", "garden -dusk"]
    )
    def test_spaced_dash(self, line, prev):
        """A dash preceded by a space marks a heading in any case."""
        assert classify_line(line, prev) is T.SCENE_HEADING

    def test_spaced_dash_outranks_dialogue(self):
        """Scene cues are tried before dialogue."""
        assert classify_line("Wait - stop!", T.CHARACTER) is T.SCENE_HEADING

    def test_unspaced_dash_is_not_a_cue(self):
        """Hyphenated words do not open a scene."""
        assert classify_line("A well-lit room.", T.EMPTY) is T.ACTION
        assert classify_line("Scene #1# again", T.EMPTY) is T.ACTION


class TestAction:
    """Test action classification."""

    def test_forced_action(self):
        """! forces action even for upper-case lines after a blank."""
        assert classify_line("!BANG", T.EMPTY) is T.ACTION

    def test_default_prose(self):
        """Ordinary prose is action."""
        assert classify_line("John enters.", T.EMPTY) is T.ACTION
        assert classify_line("He sits down.", T.ACTION) is T.ACTION

    def test_upper_case_line_after_action(self):
        """An upper-case line without a blank line before it is action."""
        assert classify_line("BOOM", T.ACTION) is T.ACTION

    def test_all_caps_colon_is_action(self):
        """An all-caps line ending in a colon that is not TO:/IN: is action."""
        assert classify_line("MONTAGE:", T.EMPTY) is T.ACTION


class TestTransition:
    """Test transition cues."""

    @pytest.mark.parametrize(
        "line",
        ["CUT TO:", "SMASH CUT TO:", "IRIS IN:", "FADE TO BLACK.", "> BURN TO WHITE."],
    )
    def test_transition_cues(self, line):
        """Suffix, prefix and forced transitions."""
        assert classify_line(line, T.EMPTY) is T.TRANSITION

    def test_centered_text_is_transition(self):
        """>centered< text uses the forced transition marker."""
        assert classify_line(">THE BEGINNING<", T.EMPTY) is T.TRANSITION

    def test_lower_case_is_not_transition(self):
        """Transition cues need an upper-case line."""
        assert classify_line("He walks to:", T.EMPTY) is T.ACTION


class TestCharacter:
    """Test character cues."""

    def test_upper_case_after_blank(self):
        """An upper-case line after a blank line is a character cue."""
        assert classify_line("JOHN", T.EMPTY) is T.CHARACTER
        assert classify_line("STEEL (O.S.)", T.EMPTY) is T.CHARACTER

    def test_forced_character(self):
        """@ forces a character cue."""
        assert classify_line("@McCLANE", T.ACTION) is T.CHARACTER

    @pytest.mark.parametrize(
        "line",
        [
            "CLOSE ON -- THE DOOR",
            "WIDE ANGLE",
            "ESTABLISHING SHOT",
            "JOHN'S P.O.V.",
            '"HELLO"',
        ],
    )
    def test_exclusions(self, line):
        """Camera directions, double dashes and quoted lines are not cues."""
        assert classify_line(line, T.EMPTY) is not T.CHARACTER

    def test_needs_blank_line_before(self):
        """Without a blank line before, an upper-case line is not a cue."""
        assert classify_line("JOHN", T.DIALOGUE) is T.ACTION


class TestDialogueAndParenthetical:
    """Test lines following a character cue."""

    def test_dialogue_after_character(self):
        """Text after a cue is dialogue."""
        assert classify_line("Hello there.", T.CHARACTER) is T.DIALOGUE

    def test_dialogue_after_parenthetical(self):
        """Text after a parenthetical is dialogue."""
        assert classify_line("Hello there.", T.PARENTHETICAL) is T.DIALOGUE

    def test_parenthetical_after_character(self):
        """(wryly) after a cue is a parenthetical."""
        assert classify_line("(quietly)", T.CHARACTER) is T.PARENTHETICAL

    def test_parenthetical_after_dialogue(self):
        """(beat) inside a speech is a parenthetical."""
        assert classify_line("(beat)", T.DIALOGUE) is T.PARENTHETICAL

    def test_unclosed_parenthesis_is_dialogue(self):
        """A ( without a closing ) after a cue is dialogue."""
        assert classify_line("(and so on", T.CHARACTER) is T.DIALOGUE

    def test_blank_line_ends_speech(self):
        """A blank line after a cue is empty, not dialogue."""
        assert classify_line("", T.CHARACTER) is T.EMPTY


class TestNotesAndBoneyard:
    """Test notes and boneyard blocks."""

    def test_single_line_note(self):
        """[[note]] on one line."""
        assert classify_line("[[Check this.]]", T.EMPTY) is T.NOTE

    def test_multi_line_note(self):
        """An open note continues until ]] and ends on a blank line."""
        assert block_open_after("[[Start of a note", T.NOTE)
        assert classify_line("still the note", T.NOTE, block_open=True) is T.NOTE
        assert classify_line("end of it]]", T.NOTE, block_open=True) is T.NOTE
        assert not block_open_after("end of it]]", T.NOTE, was_open=True)
        assert classify_line("", T.NOTE, block_open=True) is T.EMPTY

    def test_closed_note_does_not_continue(self):
        """Prose after a closed note is not part of it."""
        assert classify_line("John leaves.", T.NOTE) is T.ACTION

    def test_single_line_boneyard(self):
        """/* cut */ on one line."""
        assert classify_line("/* cut scene */", T.EMPTY) is T.BONEYARD

    def test_open_boneyard_swallows_everything(self):
        """Blank lines and headings inside a boneyard stay boneyard."""
        for line in ("", "INT. HOUSE - DAY", "JOHN", "===", "done */"):
            assert classify_line(line, T.BONEYARD, block_open=True) is T.BONEYARD

    def test_boneyard_block_state(self):
        """Block state follows the last opener or closer on a line."""
        assert block_open_after("/* start", T.BONEYARD)
        assert block_open_after("middle", T.BONEYARD, was_open=True)
        assert not block_open_after("end */", T.BONEYARD, was_open=True)
        assert block_open_after("/* a */ /* b", T.BONEYARD)
        assert not block_open_after("John enters.", T.ACTION, was_open=True)


class TestMisc:
    """Test the remaining types and the fallback."""

    def test_lyric(self):
        """~ opens a lyric line."""
        assert classify_line("~Willy Wonka! Willy Wonka!", T.EMPTY) is T.LYRIC

    def test_closed_tilde_is_not_lyric(self):
        """A line closed with a trailing ~ is not a lyric."""
        assert classify_line("~strike~", T.EMPTY) is not T.LYRIC

    def test_empty(self):
        """Blank and whitespace-only lines are empty outside the title page."""
        assert classify_line("", T.ACTION) is T.EMPTY
        assert classify_line("   \t", T.DIALOGUE) is T.EMPTY

    def test_totality(self):
        """Every line gets some type from every previous type."""
        for prev in ElementType:
            for line in ("", "x", "~", "((", "*/", "]]", "@", ">", "INT"):
                assert isinstance(classify_line(line, prev), ElementType)
