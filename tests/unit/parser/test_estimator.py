"""Tests for the script likelihood estimate."""

import pytest

from cuecard.exceptions import InvalidInputError
from cuecard.parser.estimator import estimate_structure


class TestEstimateStructure:
    """Test estimate_structure."""

    def test_likely_script(self):
        """Test five cue lines from three speakers."""
        text = "\n".join(
            [
                "ROMEO: a",
                "GIULIETTA: b",
                "MERCUZIO: c",
                "ROMEO: d",
                "GIULIETTA: e",
            ]
        )
        estimate = estimate_structure(text)
        assert estimate.is_likely_script
        assert estimate.dialogue_line_count == 5
        assert estimate.character_count == 3
        assert estimate.character_names == ["ROMEO", "GIULIETTA", "MERCUZIO"]
        assert not estimate.has_scene_markers

    def test_needs_more_than_three_cue_lines(self):
        """Test that exactly three cue lines are not enough."""
        estimate = estimate_structure("ROMEO: a\nGIULIETTA: b\nROMEO: c")
        assert estimate.dialogue_line_count == 3
        assert not estimate.is_likely_script

    def test_needs_two_speakers(self):
        """Test that a monologue is not called a script."""
        estimate = estimate_structure("\n".join(["AMLETO: x"] * 6))
        assert estimate.character_count == 1
        assert not estimate.is_likely_script

    def test_leading_whitespace_ignored(self):
        """Test that indented cue lines are still counted."""
        estimate = estimate_structure("   ROMEO: a\n\tGIULIETTA: b")
        assert estimate.dialogue_line_count == 2

    def test_scene_markers_reported(self, two_act_text):
        """Test that act and scene markers are noticed."""
        estimate = estimate_structure(two_act_text)
        assert estimate.has_scene_markers
        assert estimate.is_likely_script

    def test_plain_prose(self):
        """Test text without any cues."""
        estimate = estimate_structure("C'era una volta un re.\nE viveva felice.")
        assert estimate.dialogue_line_count == 0
        assert estimate.character_names == []
        assert not estimate.is_likely_script

    def test_empty_text(self):
        """Test that empty text gives an empty estimate."""
        estimate = estimate_structure("")
        assert estimate.character_count == 0
        assert not estimate.is_likely_script

    @pytest.mark.parametrize("value", [None, 42, b"ROMEO: a"])
    def test_rejects_non_text(self, value):
        """Test that non-string input raises InvalidInputError."""
        with pytest.raises(InvalidInputError):
            estimate_structure(value)
