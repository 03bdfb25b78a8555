"""Data models for strings extracted from Svelte templates."""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class Kind(str, Enum):
    """Which marker produced an extraction."""

    GETTEXT = "gettext"  # gettext("msgid")
    NGETTEXT = "ngettext"  # ngettext("singular", "plural", n)


class Location(NamedTuple):
    """A 1-based source position."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


EntryKey = Tuple[str, ...]


def entry_key(kind: Kind, msgid: str, plural: Optional[str] = None) -> EntryKey:
    """
    Build the key used to match a catalog entry back to its extraction.

    Simple entries are keyed by ``("gettext", msgid)``, plural entries by
    ``("ngettext", msgid, plural)``.
    """
    if kind == Kind.NGETTEXT:
        return (Kind.NGETTEXT.value, msgid, plural or "")
    return (Kind.GETTEXT.value, msgid)


@dataclass
class RawOccurrence:
    """A single marker call found by the scanner, before deduplication."""

    msgid: str
    kind: Kind
    location: Location
    plural: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str, str]:
        """Identity key shared with ExtractionUnit."""
        return (self.msgid, self.kind.value, self.plural or "")


@dataclass(frozen=True)
class ExtractionUnit:
    """A deduplicated translatable string with every place it was found."""

    msgid: str
    kind: Kind
    plural: Optional[str] = None
    locations: Tuple[Location, ...] = field(default_factory=tuple)

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.msgid, self.kind.value, self.plural or "")

    @property
    def entry_key(self) -> EntryKey:
        return entry_key(self.kind, self.msgid, self.plural)

    @property
    def is_plural(self) -> bool:
        return self.kind == Kind.NGETTEXT

    @property
    def lookup_key(self) -> str:
        """Key used in the runtime translation table."""
        if self.is_plural:
            return f"{self.msgid}|||{self.plural}"
        return self.msgid

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "msgid": self.msgid,
            "type": self.kind.value,
            "plural": self.plural,
            "references": [[loc.file, loc.line] for loc in self.locations],
        }
