"""Deduplication of scanner output into a canonical catalog."""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..models.extraction import ExtractionUnit, RawOccurrence
from .scanner import Scanner


def reduce_occurrences(occurrences: Iterable[RawOccurrence]) -> List[ExtractionUnit]:
    """
    Merge occurrences sharing (msgid, kind, plural) into single units.

    Locations are deduplicated and sorted. Units are sorted by msgid, then
    kind, then plural, so the output is reproducible.

    Args:
        occurrences: Scanner output, possibly from many files

    Returns:
        Sorted list of ExtractionUnit
    """
    groups: Dict[Tuple[str, str, str], List[RawOccurrence]] = {}
    for occurrence in occurrences:
        groups.setdefault(occurrence.key, []).append(occurrence)

    units = []
    for key in sorted(groups):
        group = groups[key]
        first = group[0]
        locations = sorted({o.location for o in group})
        units.append(ExtractionUnit(
            msgid=first.msgid,
            kind=first.kind,
            plural=first.plural,
            locations=tuple(locations),
        ))

    return units


def extract_all(
    files: Iterable[Union[str, Path]],
    scanner: Optional[Scanner] = None,
    root: Optional[Union[str, Path]] = None,
) -> List[ExtractionUnit]:
    """Scan every file and reduce the combined occurrences."""
    scanner = scanner or Scanner()
    occurrences: List[RawOccurrence] = []
    for file_path in files:
        occurrences.extend(scanner.scan_file(file_path, root=root))
    return reduce_occurrences(occurrences)


def find_source_files(directory: Union[str, Path], extension: str = ".svelte") -> List[Path]:
    """
    Recursively find template files under a directory.

    A missing directory yields an empty list so a project can build before
    its template directory exists.
    """
    path = Path(directory)
    if not path.is_dir():
        return []
    suffix = extension if extension.startswith(".") else f".{extension}"
    return sorted(p for p in path.rglob(f"*{suffix}") if p.is_file())
