"""Script structuring entry point: raw text in, Script out."""

from __future__ import annotations

from typing import Any

from cuecard.config import CueCardSettings, get_logger, get_settings
from cuecard.exceptions import InvalidInputError
from cuecard.models import Script
from cuecard.parser.catalog import SpeakerCatalogBuilder
from cuecard.parser.normalizer import TextNormalizer
from cuecard.parser.segmenter import LineClassifier, ScriptSegmenter
from cuecard.parser.title import TitleExtractor

logger = get_logger(__name__)


def require_text(value: Any, argument: str = "raw_text") -> str:
    """Return value if it is a string, else raise InvalidInputError."""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        raise InvalidInputError(
            message=f"{argument} must be text, got bytes",
            hint="Decode the document first, e.g. data.decode('utf-8')",
            details={"type": type(value).__name__, "length": len(value)},
        )
    raise InvalidInputError(
        message=f"{argument} must be a string, got {type(value).__name__}",
        details={"type": type(value).__name__},
    )


class ScriptStructurer:
    """Structure raw script text into characters, scenes and lines.

    A structurer holds only configuration. Every call builds its own
    catalog and counters, so one instance can serve concurrent callers.
    """

    def __init__(self, settings: CueCardSettings | None = None) -> None:
        """Initialize the structurer.

        Args:
            settings: Heuristic parameters; the global settings when omitted
        """
        self.settings = settings or get_settings()
        self.normalizer = TextNormalizer()
        self.catalog_builder = SpeakerCatalogBuilder(
            min_mentions=self.settings.min_speaker_mentions,
            stop_words=self.settings.stop_words,
        )
        self.title_extractor = TitleExtractor(
            scan_lines=self.settings.title_scan_lines,
            max_length=self.settings.title_max_length,
            fallback_title=self.settings.fallback_title,
        )
        self.classifier = LineClassifier(self.settings.direction_verbs)

    def structure(self, raw_text: str, file_name: str | None = None) -> Script:
        """Structure raw text into a Script.

        Never fails on content: text without recognizable speakers comes
        back as a single scene of stage directions.

        Args:
            raw_text: Pasted or extracted script text
            file_name: Source file name, used as a title fallback

        Returns:
            The structured Script

        Raises:
            InvalidInputError: If raw_text is not a string
        """
        raw_text = require_text(raw_text)

        lines = self.normalizer.normalize(raw_text)
        catalog = self.catalog_builder.build(lines)
        logger.debug(
            "Built speaker catalog",
            characters=[c.name for c in catalog.characters],
            mentions=catalog.mentions,
        )

        title = self.title_extractor.extract(lines, raw_text, file_name=file_name)
        segmenter = ScriptSegmenter(
            catalog,
            default_scene_name=self.settings.default_scene_name,
            classifier=self.classifier,
        )
        script = segmenter.segment(lines, title)

        line_count = sum(len(scene.lines) for scene in script.scenes)
        if not script.characters and lines:
            logger.info("No speakers recognized; all lines kept as directions")
        logger.info(
            "Structured script",
            title=script.title,
            characters=len(script.characters),
            scenes=len(script.scenes),
            lines=line_count,
        )
        return script


def structure(
    raw_text: str,
    file_name: str | None = None,
    settings: CueCardSettings | None = None,
) -> Script:
    """Structure raw text into a Script with a one-off structurer."""
    return ScriptStructurer(settings).structure(raw_text, file_name=file_name)
