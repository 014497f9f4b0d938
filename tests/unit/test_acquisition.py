"""Tests for content acquisition and sample scripts."""

import pytest

from cuecard.acquisition import (
    CLIPBOARD_FILE_NAME,
    ContentAcquisition,
    ImportResult,
    SampleOption,
)
from cuecard.config import CueCardSettings
from cuecard.exceptions import ImportFailedError


@pytest.fixture
def acquisition():
    return ContentAcquisition()


class TestImportText:
    """Test validation of pasted or extracted text."""

    @pytest.mark.parametrize("text", [None, "", "   \n\t"])
    def test_empty_text_fails(self, acquisition, text):
        """Test that blank text is an unsuccessful import."""
        result = acquisition.import_text(text)
        assert result.success is False
        assert result.text is None
        assert "Nessun testo" in result.message

    def test_too_large_fails(self):
        """Test that text over the byte limit is refused."""
        acquisition = ContentAcquisition(CueCardSettings(max_input_bytes=10))
        result = acquisition.import_text("ROMEO: è troppo lungo")
        assert result.success is False
        assert "troppo grande" in result.message

    def test_size_counts_utf8_bytes(self):
        """Test that accented characters count as two bytes."""
        acquisition = ContentAcquisition(CueCardSettings(max_input_bytes=5))
        assert acquisition.import_text("abcde").success
        assert not acquisition.import_text("abcdè").success

    def test_prose_succeeds_with_warning(self, acquisition):
        """Test that text with too few cues is accepted with a warning."""
        result = acquisition.import_text("C'era una volta un re.")
        assert result.success is True
        assert result.text == "C'era una volta un re."
        assert result.file_name == CLIPBOARD_FILE_NAME
        assert "potrebbe non essere un copione" in result.message

    def test_script_succeeds(self, acquisition, romeo_text):
        """Test that a real script is accepted without warnings."""
        result = acquisition.import_text(romeo_text, file_name="balcone.txt")
        assert result == ImportResult(
            success=True, text=romeo_text, file_name="balcone.txt"
        )


class TestSamples:
    """Test the bundled sample scripts."""

    def test_sample_options(self, acquisition):
        """Test the listed samples."""
        assert acquisition.sample_options() == [
            SampleOption(id="romeo-giulietta", title="Romeo e Giulietta"),
            SampleOption(id="amleto", title="Amleto"),
        ]

    def test_load_sample(self, acquisition, hamlet_text):
        """Test loading a sample by key."""
        result = acquisition.load_sample("amleto")
        assert result.success
        assert result.text == hamlet_text
        assert result.file_name == "Esempio: amleto"

    def test_unknown_sample_falls_back(self, acquisition, romeo_text):
        """Test that an unknown key loads the default sample."""
        assert acquisition.load_sample("otello").text == romeo_text

    def test_structure_sample(self, acquisition):
        """Test that the Hamlet sample structures into two characters."""
        script = acquisition.structure(acquisition.load_sample("amleto"))
        assert script.title == "Amleto - Atto 3, Scena 1"
        assert [c.name for c in script.characters] == ["AMLETO", "OFELIA"]
        assert len(script.lines_for_character("1")) == 2


class TestStructureResult:
    """Test structuring of import results."""

    def test_failed_import_raises(self, acquisition):
        """Test that a failed result cannot be structured."""
        result = acquisition.import_text("")
        with pytest.raises(ImportFailedError) as exc_info:
            acquisition.structure(result)
        assert exc_info.value.hint == result.message

    def test_file_name_used_for_title(self, acquisition):
        """Test that the import file name reaches title inference."""
        text = "ROMEO: a\nGIULIETTA: b\nROMEO: c\nGIULIETTA: d"
        script = acquisition.structure(
            acquisition.import_text(text, file_name="la_bottega.pdf")
        )
        assert script.title == "la bottega"
