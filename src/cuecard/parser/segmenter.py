"""Walk normalized lines and segment them into scenes and lines."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from cuecard.config.settings import DEFAULT_DIRECTION_VERBS, DEFAULT_SCENE_NAME
from cuecard.models import DIRECTION_CHARACTER_ID, Line, Scene, Script
from cuecard.parser.catalog import SpeakerCatalog
from cuecard.parser.patterns import is_scene_marker


class LineClassifier:
    """Heuristics for lines that carry no speaker cue."""

    def __init__(self, direction_verbs: Iterable[str] | None = None) -> None:
        verbs = DEFAULT_DIRECTION_VERBS if direction_verbs is None else direction_verbs
        self.direction_verbs = [verb for verb in verbs if verb.strip()]
        # Whole words only: "Entrambi" is not "Entra"
        alternatives = "|".join(
            re.escape(verb.strip())
            for verb in sorted(self.direction_verbs, key=len, reverse=True)
        )
        self._direction_pattern = (
            re.compile(rf"^(?:{alternatives})\b", re.IGNORECASE) if alternatives else None
        )

    def is_scene_direction(self, line: str) -> bool:
        """Return True for parenthesized lines and stage-action openings."""
        if line.startswith("(") and line.endswith(")"):
            return True
        return bool(self._direction_pattern and self._direction_pattern.match(line))

    @staticmethod
    def looks_like_dialogue(line: str) -> bool:
        """Return True if a line reads like something a character says."""
        if len(line) < 3:
            return False
        if line.endswith((".", "!", "?")):
            return True
        if line.startswith("(") or (line.upper() == line and len(line) > 10):
            return False
        return True


class _SegmentState:
    """Mutable state of a single segmentation run."""

    def __init__(self, default_scene_name: str) -> None:
        self.scenes = [Scene(id="1", name=default_scene_name)]
        self.current_character_id: str | None = None
        self.line_counter = 0

    @property
    def scene(self) -> Scene:
        return self.scenes[-1]

    def open_scene(self, name: str) -> None:
        self.scenes.append(Scene(id=str(len(self.scenes) + 1), name=name))

    def append(self, character_id: str, text: str, is_direction: bool = False) -> None:
        self.line_counter += 1
        self.scene.lines.append(
            Line(
                id=str(self.line_counter),
                character_id=character_id,
                text=text,
                scene_id=self.scene.id,
                is_direction=is_direction,
            )
        )

    def append_direction(self, text: str) -> None:
        self.append(DIRECTION_CHARACTER_ID, text, is_direction=True)


class ScriptSegmenter:
    """Turn normalized lines into a Script using a speaker catalog.

    Each line is, in order of precedence: a scene marker (opens a scene and
    is not stored), a ``NAME:`` cue for a cataloged character, a continuation
    or new utterance of the current speaker, or a stage direction.
    """

    def __init__(
        self,
        catalog: SpeakerCatalog,
        default_scene_name: str = DEFAULT_SCENE_NAME,
        classifier: LineClassifier | None = None,
    ) -> None:
        self.catalog = catalog
        self.default_scene_name = default_scene_name
        self.classifier = classifier or LineClassifier()

    def segment(self, lines: Sequence[str], title: str) -> Script:
        """Segment lines into a Script.

        Args:
            lines: Normalized lines of the document
            title: Title for the resulting script

        Returns:
            Script with the catalog's characters and at least one scene
        """
        state = _SegmentState(self.default_scene_name)
        for line in lines:
            self._consume(state, line)

        return Script(
            title=title,
            characters=list(self.catalog.characters),
            scenes=state.scenes,
        )

    def _consume(self, state: _SegmentState, line: str) -> None:
        if is_scene_marker(line):
            state.open_scene(line)
            return

        cue = self.catalog.match(line)
        if cue is not None:
            character, remainder = cue
            state.current_character_id = character.id
            if remainder:
                state.append(character.id, remainder)
            return

        speaker = state.current_character_id
        if speaker is None or self.classifier.is_scene_direction(line):
            state.append_direction(line)
            return

        lines = state.scene.lines
        if lines and lines[-1].character_id == speaker:
            lines[-1].text = f"{lines[-1].text} {line}"
        elif self.classifier.looks_like_dialogue(line):
            state.append(speaker, line)
        else:
            state.append_direction(line)
