"""Rewrite PO/POT reference comments to point at the original templates."""

import re
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from ..models.extraction import EntryKey, ExtractionUnit, Kind, Location, entry_key

REFERENCE_PREFIX = "#: "
MSGID_PREFIX = "msgid "
MSGID_PLURAL_PREFIX = "msgid_plural "

ReferenceMap = Dict[EntryKey, Sequence[Location]]

_STRING_PATTERN = re.compile(r'^msgid(?:_plural)?\s+"(.*)"')
_CONTINUATION_PATTERN = re.compile(r'^"(.*)"\s*$')
_PO_ESCAPE_PATTERN = re.compile(r"\\(.)")
_PO_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


class RewriteResult(NamedTuple):
    """New catalog text and how many reference lines were replaced."""

    new_text: str
    replacement_count: int


def unescape_po(value: str) -> str:
    """Undo PO string escaping (\\n, \\t, \\" and \\\\)."""
    return _PO_ESCAPE_PATTERN.sub(
        lambda m: _PO_ESCAPES.get(m.group(1), m.group(0)), value
    )


def extract_string(line: str) -> str:
    """Return the unescaped string of a single ``msgid``/``msgid_plural`` line."""
    return read_string([line], 0)


def read_string(lines: List[str], index: int) -> str:
    """
    Return the unescaped string starting at ``lines[index]``.

    Continuation lines (``"..."``) following the keyword line are joined,
    so wrapped and multi-line strings read the same as single-line ones.
    """
    match = _STRING_PATTERN.match(lines[index].rstrip("\r"))
    if not match:
        return ""
    parts = [match.group(1)]
    for line in lines[index + 1:]:
        continuation = _CONTINUATION_PATTERN.match(line.rstrip("\r"))
        if not continuation:
            break
        parts.append(continuation.group(1))
    return unescape_po("".join(parts))


def format_reference_line(locations: Iterable[Location]) -> str:
    """Build a single ``#:`` line listing every location."""
    return REFERENCE_PREFIX + " ".join(f"{file}:{line}" for file, line in locations)


def reference_paths(line: str) -> List[str]:
    """Return the path of every ``path:line`` token on a ``#:`` line."""
    payload = line.rstrip("\r")[len(REFERENCE_PREFIX):]
    return [token.rsplit(":", 1)[0] for token in payload.split()]


def build_reference_map(units: Iterable[ExtractionUnit]) -> ReferenceMap:
    """
    Map each unit's entry key to its locations.

    Units sharing a key (e.g. from several extraction runs) have their
    locations merged.
    """
    merged: Dict[EntryKey, set] = {}
    for unit in units:
        merged.setdefault(unit.entry_key, set()).update(unit.locations)
    return {key: sorted(locations) for key, locations in merged.items()}


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def _is_msgid(lines: List[str], index: int) -> bool:
    """
    Check for the start of an entry's msgid.

    ``msgid ""`` only starts an entry when continuation lines follow it;
    on its own it is the header.
    """
    line = lines[index]
    if not line.startswith(MSGID_PREFIX):
        return False
    if line.rstrip() != 'msgid ""':
        return True
    following = lines[index + 1] if index + 1 < len(lines) else ""
    return bool(_CONTINUATION_PATTERN.match(following.rstrip("\r")))


class ReferenceRewriter:
    """
    Replaces reference comments that point at the generated intermediate
    module with the original template locations.

    Only lines whose every reference is the intermediate module are
    replaced. Lines mentioning anything else (hand-written ``.ex`` or
    ``.heex`` sources) are left untouched, which also makes the rewrite
    idempotent.
    """

    def __init__(self, intermediate_marker: str = "svelte_strings.ex"):
        self.intermediate_marker = intermediate_marker

    def rewrite(self, text: str, reference_map: ReferenceMap) -> RewriteResult:
        """
        Rewrite the reference lines of every entry found in ``reference_map``.

        Args:
            text: Contents of a .po or .pot file
            reference_map: Entry key -> original locations

        Returns:
            RewriteResult with the new text and the number of replaced lines
        """
        lines = text.split("\n")
        output: List[str] = []
        pending: List[int] = []
        count = 0

        for index, line in enumerate(lines):
            if line.startswith(REFERENCE_PREFIX):
                pending.append(len(output))
                output.append(line)
            elif _is_msgid(lines, index):
                key = self._entry_key(lines, index)
                for position in pending:
                    new_line = self._fix_reference_line(output[position], key, reference_map)
                    if new_line is not None:
                        output[position] = new_line
                        count += 1
                pending = []
                output.append(line)
            elif _is_blank(line):
                pending = []
                output.append(line)
            else:
                output.append(line)

        return RewriteResult("\n".join(output), count)

    def is_intermediate(self, path: str) -> bool:
        """Check whether a reference path names the intermediate module."""
        return path == self.intermediate_marker or path.endswith("/" + self.intermediate_marker)

    def _entry_key(self, lines: List[str], index: int) -> EntryKey:
        msgid = read_string(lines, index)
        plural = self._look_for_plural(lines, index + 1)
        if plural is None:
            return entry_key(Kind.GETTEXT, msgid)
        return entry_key(Kind.NGETTEXT, msgid, plural)

    @staticmethod
    def _look_for_plural(lines: List[str], start: int) -> Optional[str]:
        """Find the entry's msgid_plural without consuming any lines."""
        for index in range(start, len(lines)):
            line = lines[index]
            if line.startswith(MSGID_PLURAL_PREFIX):
                return read_string(lines, index)
            if line.startswith(MSGID_PREFIX) or _is_blank(line):
                return None
        return None

    def _fix_reference_line(
        self, line: str, key: EntryKey, reference_map: ReferenceMap
    ) -> Optional[str]:
        """Return the replacement line, or None to keep the original."""
        paths = reference_paths(line)
        if not paths or not all(self.is_intermediate(path) for path in paths):
            return None
        locations = reference_map.get(key)
        if not locations:
            return None
        new_line = format_reference_line(locations)
        if line.endswith("\r"):
            new_line += "\r"
        return new_line
