"""Content acquisition: imported text, its validation, and sample scripts."""

from __future__ import annotations

from typing import ClassVar

from cuecard.config import CueCardSettings, get_logger, get_settings
from cuecard.exceptions import ImportFailedError
from cuecard.models import CueCardModel, Script
from cuecard.parser.estimator import estimate_structure
from cuecard.parser.structurer import ScriptStructurer

logger = get_logger(__name__)

CLIPBOARD_FILE_NAME = "Dagli appunti"
DEFAULT_SAMPLE = "romeo-giulietta"
# Fewer NAME: lines than this and the text probably is not a script
MIN_CUE_LINES = 2

ROMEO_AND_JULIET = """Romeo e Giulietta - Atto 2, Scena 2

ROMEO: Ma, attendi! Quale luce proviene da quella finestra?
È l'oriente, e Giulietta è il sole!
Sorgi, bel sole, e uccidi l'invidiosa luna,
già malata e pallida di dolore perché tu, sua ancella,
sei di gran lunga più bella di lei.

GIULIETTA: Ahimè!

ROMEO: Parla! Oh, parla ancora, angelo luminoso!

GIULIETTA: O Romeo, Romeo! Perché sei tu Romeo?
Rinnega tuo padre e rifiuta il tuo nome;
o, se proprio non vuoi, giurami solo il tuo amore
ed io non sarò più una Capuleti."""

HAMLET = """Amleto - Atto 3, Scena 1

AMLETO: Essere o non essere, questo è il dilemma:
se sia più nobile d'animo sopportare
gli strali e i colpi d'una sorte oltraggiosa,
o prender l'armi contro un mare d'affanni
e, combattendo, finirli.

OFELIA: Buon principe, come sta la Vostra Altezza da tanti giorni?

AMLETO: Umilmente vi ringrazio: bene, bene, bene.

OFELIA: Altezza, ho dei vostri doni che da tempo
desideravo restituirvi; vi prego, prendeteli ora."""


class ImportResult(CueCardModel):
    """Outcome of acquiring script text from any source."""

    success: bool
    text: str | None = None
    file_name: str | None = None
    message: str | None = None


class SampleOption(CueCardModel):
    """A bundled sample script offered to new users."""

    id: str
    title: str


class ContentAcquisition:
    """Validate acquired text and provide sample scripts.

    Failures are reported as unsuccessful ImportResult values, never raised,
    so every acquisition path reports back the same way.
    """

    SAMPLES: ClassVar[dict[str, tuple[str, str]]] = {
        "romeo-giulietta": ("Romeo e Giulietta", ROMEO_AND_JULIET),
        "amleto": ("Amleto", HAMLET),
    }

    def __init__(
        self,
        settings: CueCardSettings | None = None,
        structurer: ScriptStructurer | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.structurer = structurer or ScriptStructurer(self.settings)

    def import_text(
        self, text: str | None, file_name: str = CLIPBOARD_FILE_NAME
    ) -> ImportResult:
        """Validate pasted or extracted text.

        Args:
            text: The acquired text, possibly empty
            file_name: Where the text came from

        Returns:
            ImportResult; successful results may still carry a warning message
        """
        if not text or not text.strip():
            return ImportResult(
                success=False,
                message=(
                    "Nessun testo trovato negli appunti. "
                    "Copia il testo del copione e riprova."
                ),
            )

        size = len(text.encode("utf-8"))
        if size > self.settings.max_input_bytes:
            limit_mb = self.settings.max_input_bytes / (1024 * 1024)
            logger.warning(
                "Imported text too large",
                size=size,
                max_input_bytes=self.settings.max_input_bytes,
            )
            return ImportResult(
                success=False,
                file_name=file_name,
                message=(
                    f"Il testo è troppo grande (>{limit_mb:g}MB). "
                    "Importa un copione più breve."
                ),
            )

        estimate = estimate_structure(text)
        if estimate.dialogue_line_count < MIN_CUE_LINES:
            return ImportResult(
                success=True,
                text=text,
                file_name=file_name,
                message=(
                    "Il testo importato potrebbe non essere un copione. "
                    "Verifica il formato."
                ),
            )
        return ImportResult(success=True, text=text, file_name=file_name)

    def load_sample(self, key: str = DEFAULT_SAMPLE) -> ImportResult:
        """Load a bundled sample script; unknown keys get the default one."""
        _, text = self.SAMPLES.get(key, self.SAMPLES[DEFAULT_SAMPLE])
        return ImportResult(success=True, text=text, file_name=f"Esempio: {key}")

    def sample_options(self) -> list[SampleOption]:
        """List the bundled sample scripts."""
        return [
            SampleOption(id=key, title=title)
            for key, (title, _) in self.SAMPLES.items()
        ]

    def structure(self, result: ImportResult) -> Script:
        """Structure the text of a successful import.

        Raises:
            ImportFailedError: If the import failed or carried no text
        """
        if not result.success or result.text is None:
            raise ImportFailedError(
                message="Cannot structure a failed import",
                hint=result.message,
                details={"file_name": result.file_name},
            )
        return self.structurer.structure(result.text, file_name=result.file_name)
