"""Quick check of whether a block of text looks like a script."""

from __future__ import annotations

from cuecard.models import StructureEstimate
from cuecard.parser.patterns import SpeakerPatterns, is_scene_marker
from cuecard.parser.structurer import require_text

# More than this many NAME: lines are needed to call text a script
MIN_DIALOGUE_LINES = 3
MIN_DISTINCT_SPEAKERS = 2


def estimate_structure(text: str) -> StructureEstimate:
    """Estimate whether text resembles a speaker-annotated script.

    Only the primary ``NAME:`` cue counts here. Extraction collaborators use
    the result to decide whether further cleanup is worth running.

    Args:
        text: Any block of raw or extracted text

    Returns:
        StructureEstimate with speaker names in first-seen order
    """
    text = require_text(text, "text")
    names: dict[str, None] = {}
    dialogue_lines = 0
    has_scene_markers = False

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if is_scene_marker(line):
            has_scene_markers = True
        cue = SpeakerPatterns.COLON.match(line)
        if cue:
            dialogue_lines += 1
            names.setdefault(cue.name)

    return StructureEstimate(
        is_likely_script=(
            dialogue_lines > MIN_DIALOGUE_LINES and len(names) >= MIN_DISTINCT_SPEAKERS
        ),
        character_count=len(names),
        character_names=list(names),
        dialogue_line_count=dialogue_lines,
        has_scene_markers=has_scene_markers,
    )
