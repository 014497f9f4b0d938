"""Speaker cue and scene marker patterns.

Speaker cues come in three families, tried in a fixed order. Each family is
a regex plus a capitalization check, since ``re`` has no Unicode uppercase
class and names may carry accents (NICOLÒ, PIERROT, ÉLISE).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from re import Pattern
from typing import ClassVar

# A Unicode letter: word characters minus digits and underscore
_LETTER = r"[^\W\d_]"


class SpeakerPatternKind(str, Enum):
    """Families of speaker cues."""

    COLON = "colon"  # ROMEO: Ma, attendi!
    PARENTHETICAL = "parenthetical"  # ROMEO (entrando) ...
    HEADING = "heading"  # ROMEO on a line of its own


@dataclass(frozen=True)
class SpeakerMatch:
    """A speaker cue found on a line."""

    kind: SpeakerPatternKind
    name: str


def _capitalized(name: str) -> bool:
    return name[:1].isupper()


def _all_upper(name: str) -> bool:
    return name.isupper()


@dataclass(frozen=True)
class SpeakerPattern:
    """One speaker cue family: a regex with a ``name`` group and a check."""

    kind: SpeakerPatternKind
    regex: Pattern[str]
    accepts: Callable[[str], bool]

    def match(self, line: str) -> SpeakerMatch | None:
        """Return the trimmed cue name if the line opens with this family."""
        found = self.regex.match(line)
        if not found:
            return None
        name = found.group("name").strip()
        if not name or not self.accepts(name):
            return None
        return SpeakerMatch(kind=self.kind, name=name)


class SpeakerPatterns:
    """The ordered list of speaker cue families."""

    COLON: ClassVar[SpeakerPattern] = SpeakerPattern(
        kind=SpeakerPatternKind.COLON,
        regex=re.compile(rf"^(?P<name>{_LETTER}(?:{_LETTER}|\s)*):"),
        accepts=_capitalized,
    )
    PARENTHETICAL: ClassVar[SpeakerPattern] = SpeakerPattern(
        kind=SpeakerPatternKind.PARENTHETICAL,
        regex=re.compile(rf"^(?P<name>{_LETTER}(?:{_LETTER}|\s)*)\s+\("),
        accepts=_capitalized,
    )
    HEADING: ClassVar[SpeakerPattern] = SpeakerPattern(
        kind=SpeakerPatternKind.HEADING,
        regex=re.compile(rf"^\s*(?P<name>{_LETTER}{{2,}})\s*$"),
        accepts=_all_upper,
    )

    ALL: ClassVar[list[SpeakerPattern]] = [COLON, PARENTHETICAL, HEADING]

    @classmethod
    def match(cls, line: str) -> SpeakerMatch | None:
        """Return the first speaker cue family that matches the line."""
        for pattern in cls.ALL:
            found = pattern.match(line)
            if found:
                return found
        return None


# ATTO I, Scena 2, ACT IV, SCENE 3 ... numeral must be a whole token
SCENE_MARKER_PATTERN = re.compile(
    r"^(?P<keyword>ATTO|SCENA|ACT|SCENE)\s+(?P<number>[IVX]+|\d+)\b",
    re.IGNORECASE,
)


def is_scene_marker(line: str) -> bool:
    """Return True if the line opens an act or scene."""
    return bool(SCENE_MARKER_PATTERN.match(line))
