"""Speaker catalog: which names in a text are really characters."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from cuecard.config import get_logger
from cuecard.config.settings import DEFAULT_STOP_WORDS
from cuecard.models import Character
from cuecard.parser.patterns import SpeakerPatterns

logger = get_logger(__name__)


@dataclass
class SpeakerCatalog:
    """Characters of one structuring run plus name lookup.

    ``characters`` is ordered by descending mention count. ``precedence`` is
    the order used to resolve ``NAME:`` prefixes: longest name first, so
    ``ANNABELLA:`` is never read as ``ANNA`` followed by ``BELLA:``.
    """

    characters: list[Character] = field(default_factory=list)
    mentions: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.by_name: dict[str, Character] = {c.name: c for c in self.characters}
        self.precedence: list[Character] = sorted(
            self.characters, key=lambda c: -len(c.name)
        )

    def __len__(self) -> int:
        return len(self.characters)

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def get(self, name: str) -> Character | None:
        """Return the character with exactly this name."""
        return self.by_name.get(name)

    def match(self, line: str) -> tuple[Character, str] | None:
        """Find the character whose ``NAME:`` cue opens the line.

        Args:
            line: A normalized line

        Returns:
            The character and the trimmed text after the colon, or None
        """
        for character in self.precedence:
            prefix = f"{character.name}:"
            if line.startswith(prefix):
                return character, line[len(prefix) :].strip()
        return None


class SpeakerCatalogBuilder:
    """Build a SpeakerCatalog from normalized lines.

    Every line is checked against the speaker cue families in order and the
    first match is tallied. Names that are too short, stop words, or seen
    fewer than ``min_mentions`` times are dropped.
    """

    def __init__(
        self,
        min_mentions: int = 2,
        stop_words: Iterable[str] | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            min_mentions: Cues needed before a name counts as a character
            stop_words: Words never accepted as names, compared case-insensitively
        """
        if min_mentions < 1:
            raise ValueError(f"min_mentions must be at least 1, got {min_mentions}")
        self.min_mentions = min_mentions
        words = DEFAULT_STOP_WORDS if stop_words is None else stop_words
        self.stop_words = {word.upper() for word in words}

    def is_stop_word(self, name: str) -> bool:
        """Return True if the name is a common word rather than a character."""
        return name.upper() in self.stop_words

    def count_mentions(self, lines: Iterable[str]) -> Counter[str]:
        """Tally speaker cues per name, keeping first-seen order."""
        mentions: Counter[str] = Counter()
        for line in lines:
            found = SpeakerPatterns.match(line)
            if found is None:
                continue
            if len(found.name) <= 1 or self.is_stop_word(found.name):
                continue
            mentions[found.name] += 1
        return mentions

    def build(self, lines: Sequence[str]) -> SpeakerCatalog:
        """Build the catalog for one document.

        Args:
            lines: Normalized lines of the document

        Returns:
            Catalog with ids "1", "2", ... in descending mention order
        """
        mentions = self.count_mentions(lines)
        # sorted() is stable and Counter keeps insertion order, so ties stay
        # in first-seen order
        retained = sorted(
            (item for item in mentions.items() if item[1] >= self.min_mentions),
            key=lambda item: -item[1],
        )
        characters = [
            Character(id=str(index), name=name)
            for index, (name, _) in enumerate(retained, start=1)
        ]

        dropped = len(mentions) - len(characters)
        if dropped:
            logger.debug(
                "Dropped infrequent speaker candidates",
                dropped=dropped,
                min_mentions=self.min_mentions,
            )

        return SpeakerCatalog(
            characters=characters,
            mentions={name: count for name, count in retained},
        )
