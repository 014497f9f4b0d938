"""cuecard data models.

This module defines the structured form of a rehearsal script: characters,
scenes and the lines spoken (or read as directions) inside them. Attributes
are snake_case in Python and serialize to camelCase with
``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Sentinel character id for stage directions; never in Script.characters
DIRECTION_CHARACTER_ID = "0"


class CueCardModel(BaseModel):
    """Base model with camelCase serialization aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Character(CueCardModel):
    """A speaking character detected in the script."""

    id: str
    name: str


class Line(CueCardModel):
    """A single utterance or stage direction."""

    id: str
    character_id: str
    text: str
    scene_id: str
    is_direction: bool = False


class Scene(CueCardModel):
    """An act or scene subdivision holding its lines in order."""

    id: str
    name: str
    lines: list[Line] = Field(default_factory=list)


class CuePair(CueCardModel):
    """A cue line and the user's line that answers it."""

    cue: Line
    response: Line


class Script(CueCardModel):
    """A structured script ready for rehearsal."""

    title: str
    characters: list[Character] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)

    def iter_lines(self) -> Iterator[Line]:
        """Yield every line in document order across all scenes."""
        for scene in self.scenes:
            yield from scene.lines

    def get_character(self, character_id: str) -> Character | None:
        """Look up a character by id."""
        for character in self.characters:
            if character.id == character_id:
                return character
        return None

    def lines_for_character(self, character_id: str) -> list[Line]:
        """Return all lines spoken by a character, in document order."""
        return [line for line in self.iter_lines() if line.character_id == character_id]

    def cue_lines(self, character_id: str) -> list[CuePair]:
        """Return the cues the character has to answer.

        A cue is the line directly before one of the character's lines in the
        same scene, provided it is not a stage direction.

        Args:
            character_id: Id of the character being rehearsed

        Returns:
            Cue/response pairs in document order
        """
        pairs: list[CuePair] = []
        for scene in self.scenes:
            for previous, current in zip(scene.lines, scene.lines[1:], strict=False):
                if current.character_id == character_id and not previous.is_direction:
                    pairs.append(CuePair(cue=previous, response=current))
        return pairs


class StructureEstimate(CueCardModel):
    """How much a block of text looks like a speaker-annotated script."""

    is_likely_script: bool
    character_count: int
    character_names: list[str] = Field(default_factory=list)
    dialogue_line_count: int
    has_scene_markers: bool = False


__all__ = [
    "DIRECTION_CHARACTER_ID",
    "Character",
    "CuePair",
    "CueCardModel",
    "Line",
    "Scene",
    "Script",
    "StructureEstimate",
]
