"""Writer for GNU gettext POT templates built from extracted strings."""

import datetime
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import polib

from ..models.extraction import ExtractionUnit, Location

logger = logging.getLogger(__name__)


class POTWriter:
    """
    Builds POT files from ExtractionUnit lists using polib.

    ``wrapwidth`` defaults to 0 so msgids and reference lists stay on one
    line each, which the reference rewriter relies on.
    """

    def __init__(self, project: str = "PROJECT VERSION", wrapwidth: int = 0):
        self.project = project
        self.wrapwidth = wrapwidth

    def build(
        self,
        units: Iterable[ExtractionUnit],
        reference_override: Optional[Location] = None,
    ) -> polib.POFile:
        """
        Build an in-memory POT file.

        Args:
            units: Extracted strings
            reference_override: When given, every entry references only this
                location instead of its template locations

        Returns:
            polib.POFile ready to be saved
        """
        pot = polib.POFile(wrapwidth=self.wrapwidth)
        pot.metadata = self._metadata()

        for unit in units:
            if not unit.msgid:
                # msgid "" is reserved for the header entry
                logger.warning("Skipping empty msgid at %s", ", ".join(map(str, unit.locations)))
                continue
            locations = [reference_override] if reference_override else unit.locations
            occurrences = [(file, str(line)) for file, line in locations]
            if unit.is_plural:
                entry = polib.POEntry(
                    msgid=unit.msgid,
                    msgid_plural=unit.plural,
                    msgstr_plural={0: "", 1: ""},
                    occurrences=occurrences,
                )
            else:
                entry = polib.POEntry(msgid=unit.msgid, msgstr="", occurrences=occurrences)
            pot.append(entry)

        return pot

    def write(
        self,
        units: Iterable[ExtractionUnit],
        output_path: Union[str, Path],
        reference_override: Optional[Location] = None,
    ) -> Path:
        """
        Write a POT file to disk.

        Args:
            units: Extracted strings
            output_path: Path to write the file to
            reference_override: See ``build``
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        pot = self.build(units, reference_override=reference_override)
        pot.save(str(path))
        return path

    def to_string(
        self, units: Iterable[ExtractionUnit], reference_override: Optional[Location] = None
    ) -> str:
        """Render the POT file as text."""
        return str(self.build(units, reference_override=reference_override))

    def _metadata(self) -> Dict[str, str]:
        now = datetime.datetime.now(datetime.timezone.utc)
        return {
            "Project-Id-Version": self.project,
            "POT-Creation-Date": now.strftime("%Y-%m-%d %H:%M%z"),
            "MIME-Version": "1.0",
            "Content-Type": "text/plain; charset=utf-8",
            "Content-Transfer-Encoding": "8bit",
        }
