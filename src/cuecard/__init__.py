"""cuecard: rehearse theatrical scripts.

cuecard turns raw script text (a paste, or text pulled out of a document)
into characters, scenes and lines, then reads the script aloud and pauses
on the lines the user is rehearsing.
"""

from .config import CueCardSettings, get_logger, get_settings
from .exceptions import CueCardError, InvalidInputError
from .models import (
    DIRECTION_CHARACTER_ID,
    Character,
    Line,
    Scene,
    Script,
    StructureEstimate,
)
from .parser import ScriptStructurer, estimate_structure, structure

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "DIRECTION_CHARACTER_ID",
    "Character",
    "CueCardError",
    "CueCardSettings",
    "InvalidInputError",
    "Line",
    "Scene",
    "Script",
    "ScriptStructurer",
    "StructureEstimate",
    "__version__",
    "estimate_structure",
    "get_logger",
    "get_settings",
    "structure",
]
