"""Text normalization for raw and extracted script text."""

from __future__ import annotations

import re
from collections.abc import Iterable

from cuecard.parser.patterns import SpeakerPatterns

# Page breaks and exotic line separators all become plain newlines
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|[\x0b\x0c\x85\u2028\u2029]")
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0e-\x1f\x7f-\x9f\u200b-\u200d\ufeff]")
WHITESPACE_PATTERN = re.compile(r"\s+")
EXCESS_BLANK_LINES_PATTERN = re.compile(r"\n\s*\n(?:\s*\n)+")
# Roman numerals must be uppercase; keyword and number share one line.
LINE_START_MARKER_PATTERN = re.compile(
    r"^[ \t]*(ATTO|SCENA|ACT|SCENE)[ \t]+((?-i:[IVX]+)|\d+)(?=[ \t.]|$)\.?[ \t]*",
    re.IGNORECASE | re.MULTILINE,
)

SENTENCE_END = (".", "!", "?")


class TextNormalizer:
    """Turn noisy text into clean logical lines.

    ``normalize`` is what the structuring pipeline uses. The fragment helpers
    serve extraction collaborators that hand over text pieces instead of
    lines and need paragraphs rebuilt first.
    """

    def normalize(self, raw_text: str) -> list[str]:
        """Split text into trimmed, non-empty, whitespace-collapsed lines.

        Args:
            raw_text: Arbitrary text, possibly with control bytes

        Returns:
            Logical lines in original order (empty for blank input)
        """
        text = LINE_BREAK_PATTERN.sub("\n", raw_text)
        text = CONTROL_CHAR_PATTERN.sub("", text)
        lines = []
        for raw_line in text.split("\n"):
            line = WHITESPACE_PATTERN.sub(" ", raw_line).strip()
            if line:
                lines.append(line)
        return lines

    def clean_fragment(self, piece: str) -> str:
        """Strip control characters and collapse whitespace in a fragment."""
        cleaned = CONTROL_CHAR_PATTERN.sub("", LINE_BREAK_PATTERN.sub(" ", piece))
        return WHITESPACE_PATTERN.sub(" ", cleaned).strip()

    def join_fragments(self, pieces: Iterable[str]) -> str:
        """Rebuild paragraphs from extraction fragments.

        A fragment opening with a ``NAME:`` cue starts a new paragraph, a
        fragment ending a sentence closes one, and a short all-caps fragment
        is taken as a heading on its own. Everything else is glued onto the
        paragraph in progress.

        Args:
            pieces: Text fragments in reading order

        Returns:
            Paragraphs separated by a single blank line
        """
        paragraphs: list[str] = []
        current: list[str] = []

        def flush() -> None:
            if current:
                paragraphs.append(" ".join(current))
                current.clear()

        for raw_piece in pieces:
            piece = self.clean_fragment(raw_piece)
            if len(piece) <= 1:
                continue

            if SpeakerPatterns.COLON.match(piece):
                flush()
                current.append(piece)
                if piece.endswith(SENTENCE_END):
                    flush()
            elif piece.endswith(SENTENCE_END):
                current.append(piece)
                flush()
            elif piece.isupper() and 3 < len(piece) < 30:
                flush()
                paragraphs.append(piece)
            else:
                current.append(piece)

        flush()
        return "\n\n".join(paragraphs)

    def tidy_extracted_text(self, text: str) -> str:
        """Collapse blank-line runs and give act/scene markers their own line."""
        text = LINE_BREAK_PATTERN.sub("\n", text)
        text = LINE_START_MARKER_PATTERN.sub(
            lambda m: f"\n\n{m.group(1)} {m.group(2)}\n", text
        )
        text = EXCESS_BLANK_LINES_PATTERN.sub("\n\n", text)
        return text.strip()
