"""Script structuring engine for cuecard."""

from __future__ import annotations

from .catalog import SpeakerCatalog, SpeakerCatalogBuilder
from .estimator import estimate_structure
from .normalizer import TextNormalizer
from .patterns import SpeakerMatch, SpeakerPatternKind, SpeakerPatterns
from .segmenter import LineClassifier, ScriptSegmenter
from .structurer import ScriptStructurer, structure
from .title import TitleExtractor

__all__ = [
    "LineClassifier",
    "ScriptSegmenter",
    "ScriptStructurer",
    "SpeakerCatalog",
    "SpeakerCatalogBuilder",
    "SpeakerMatch",
    "SpeakerPatternKind",
    "SpeakerPatterns",
    "TextNormalizer",
    "TitleExtractor",
    "estimate_structure",
    "structure",
]
