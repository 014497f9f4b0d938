"""Property-based tests using Hypothesis.

These tests generate random script-like text and check the structural
guarantees of the structurer: it never fails on content, numbers lines and
scenes consecutively, and only references characters it cataloged.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from cuecard.models import DIRECTION_CHARACTER_ID
from cuecard.parser import ScriptStructurer, TextNormalizer, estimate_structure

NAMES = ["ROMEO", "GIULIETTA", "MERCUZIO", "BALIA", "Frate Lorenzo"]

script_line = st.one_of(
    st.builds(
        lambda name, text: f"{name}: {text}",
        st.sampled_from(NAMES),
        st.text(min_size=0, max_size=40),
    ),
    st.sampled_from(
        [
            "ATTO I",
            "Scena 2",
            "(ride)",
            "Entra Mercuzio",
            "ROMEO",
            "GIULIETTA (sottovoce)",
            "FINE",
            "UNA GRANDE PIAZZA",
            "",
        ]
    ),
    st.text(max_size=60),
)

script_text = st.lists(script_line, max_size=40).map("\n".join)


class TestPropertyBasedStructurer:
    """Structural invariants of ScriptStructurer.structure."""

    @given(text=st.text())
    @settings(max_examples=200)
    def test_never_fails_on_text(self, text: str):
        """Test that any string structures into at least one scene."""
        script = ScriptStructurer().structure(text)
        assert script.title
        assert len(script.scenes) >= 1

    @given(text=script_text)
    def test_line_ids_are_consecutive(self, text: str):
        """Test that line ids run 1..N across all scenes."""
        script = ScriptStructurer().structure(text)
        ids = [line.id for line in script.iter_lines()]
        assert ids == [str(i) for i in range(1, len(ids) + 1)]

    @given(text=script_text)
    def test_scene_ids_and_membership(self, text: str):
        """Test scene numbering and that lines point at their own scene."""
        script = ScriptStructurer().structure(text)
        assert [scene.id for scene in script.scenes] == [
            str(i) for i in range(1, len(script.scenes) + 1)
        ]
        for scene in script.scenes:
            for line in scene.lines:
                assert line.scene_id == scene.id

    @given(text=script_text)
    def test_character_references(self, text: str):
        """Test that lines reference cataloged characters or directions."""
        script = ScriptStructurer().structure(text)
        known = {c.id for c in script.characters}
        assert DIRECTION_CHARACTER_ID not in known
        assert [c.id for c in script.characters] == [
            str(i) for i in range(1, len(script.characters) + 1)
        ]
        for line in script.iter_lines():
            assert line.character_id in known | {DIRECTION_CHARACTER_ID}
            assert line.is_direction == (line.character_id == DIRECTION_CHARACTER_ID)
            assert line.text

    @given(text=script_text)
    def test_deterministic(self, text: str):
        """Test that structuring is a pure function of its input."""
        structurer = ScriptStructurer()
        assert structurer.structure(text) == structurer.structure(text)


class TestPropertyBasedNormalizer:
    """Invariants of TextNormalizer.normalize."""

    @given(text=st.text())
    def test_lines_are_clean(self, text: str):
        """Test that normalized lines are trimmed and non-empty."""
        for line in TextNormalizer().normalize(text):
            assert line
            assert line == line.strip()
            assert "\n" not in line
            assert "  " not in line

    @given(text=st.text())
    def test_idempotent(self, text: str):
        """Test that normalizing joined output changes nothing."""
        normalizer = TextNormalizer()
        lines = normalizer.normalize(text)
        assert normalizer.normalize("\n".join(lines)) == lines


class TestPropertyBasedEstimate:
    """Invariants of estimate_structure."""

    @given(text=script_text)
    def test_counts_are_consistent(self, text: str):
        """Test that the estimate never reports more names than cue lines."""
        estimate = estimate_structure(text)
        assert estimate.character_count == len(estimate.character_names)
        assert estimate.character_count <= estimate.dialogue_line_count
        if estimate.is_likely_script:
            assert estimate.dialogue_line_count > 3
            assert estimate.character_count >= 2
