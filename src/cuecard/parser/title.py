"""Title inference from the opening lines of a script."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import PurePath
from typing import ClassVar

from cuecard.config.settings import DEFAULT_FALLBACK_TITLE


class TitleExtractor:
    """Guess a script title.

    The opening lines are scanned for short, colon-free candidates. When a
    mixed-case line is followed by an all-caps one, the all-caps line is
    usually the real title and the first is an author or subtitle.
    """

    # name.pdf / name.txt at the very end of the inspected prefix
    FILENAME_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"([^/\\\n]+)\.(pdf|txt)$", re.IGNORECASE
    )
    FILENAME_SCAN_CHARS: ClassVar[int] = 100
    MAX_CANDIDATES: ClassVar[int] = 2

    def __init__(
        self,
        scan_lines: int = 10,
        max_length: int = 60,
        fallback_title: str = DEFAULT_FALLBACK_TITLE,
    ) -> None:
        """Initialize the extractor.

        Args:
            scan_lines: How many leading lines may hold the title
            max_length: Candidates must be strictly shorter than this
            fallback_title: Title used when nothing else is found
        """
        self.scan_lines = scan_lines
        self.max_length = max_length
        self.fallback_title = fallback_title

    def is_candidate(self, line: str) -> bool:
        """Return True if a line could be a title."""
        return 0 < len(line) < self.max_length and ":" not in line

    def candidates(self, lines: Sequence[str]) -> list[str]:
        """Collect up to two title candidates from the opening lines."""
        found: list[str] = []
        for line in lines[: self.scan_lines]:
            if self.is_candidate(line):
                found.append(line)
            if len(found) >= self.MAX_CANDIDATES:
                break
        return found

    def extract(
        self,
        lines: Sequence[str],
        raw_text: str = "",
        file_name: str | None = None,
    ) -> str:
        """Pick the most likely title.

        Args:
            lines: Normalized lines of the document
            raw_text: The raw input, searched for a trailing file name
            file_name: File name reported by the import collaborator

        Returns:
            The inferred title, never empty
        """
        found = self.candidates(lines)
        if found:
            if len(found) > 1 and _is_all_caps(found[1]) and not _is_all_caps(found[0]):
                return found[1]
            return found[0]

        # Only real file names; "Dagli appunti" and the like carry no title
        if file_name and PurePath(file_name).suffix:
            title = self.title_from_file_name(file_name)
            if title:
                return title

        match = self.FILENAME_PATTERN.search(
            raw_text[: self.FILENAME_SCAN_CHARS].strip()
        )
        if match:
            title = self.title_from_file_name(match.group(0))
            if title:
                return title

        return self.fallback_title

    @staticmethod
    def title_from_file_name(file_name: str) -> str:
        """Turn ``romeo_e-giulietta.pdf`` into ``romeo e giulietta``."""
        stem = PurePath(file_name.replace("\\", "/")).stem
        return " ".join(re.sub(r"[_-]", " ", stem).split())


def _is_all_caps(text: str) -> bool:
    return text.upper() == text
