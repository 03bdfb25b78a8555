"""Apply the reference rewriter to PO/POT files on disk."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..models.fix_result import FileFixResult, FixSummary
from .reference_rewriter import ReferenceMap, ReferenceRewriter

logger = logging.getLogger(__name__)


class CatalogFileError(Exception):
    """A catalog file could not be read or written."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


def find_catalog_files(gettext_path: Union[str, Path]) -> List[Path]:
    """Find all .pot and .po files under the gettext directory."""
    root = Path(gettext_path)
    if not root.is_dir():
        return []
    files = [p for p in root.rglob("*") if p.is_file() and p.suffix in (".pot", ".po")]
    return sorted(files)


def fix_reference_file(
    path: Union[str, Path],
    reference_map: ReferenceMap,
    rewriter: Optional[ReferenceRewriter] = None,
    dry_run: bool = False,
) -> FileFixResult:
    """
    Rewrite the references in one catalog file.

    The file is only written when its content changes and ``dry_run`` is off.

    Raises:
        CatalogFileError: If the file cannot be read or written
    """
    rewriter = rewriter or ReferenceRewriter()
    path = Path(path)

    try:
        # newline="" keeps CRLF line endings intact
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogFileError(path, f"cannot read: {e}") from e

    new_content, replacements = rewriter.rewrite(content, reference_map)
    modified = new_content != content

    if modified and not dry_run:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(new_content)
        except OSError as e:
            raise CatalogFileError(path, f"cannot write: {e}") from e

    return FileFixResult(path=str(path), replacements=replacements, modified=modified)


def fix_reference_files(
    paths: Iterable[Union[str, Path]],
    reference_map: ReferenceMap,
    rewriter: Optional[ReferenceRewriter] = None,
    dry_run: bool = False,
) -> FixSummary:
    """
    Rewrite references in a batch of catalog files.

    A failure on one file is recorded in its result and the batch carries on
    with the remaining files.
    """
    rewriter = rewriter or ReferenceRewriter()
    summary = FixSummary(dry_run=dry_run)

    for path in paths:
        try:
            result = fix_reference_file(path, reference_map, rewriter, dry_run=dry_run)
        except CatalogFileError as e:
            logger.error("Failed to fix references in %s: %s", e.path, e.reason)
            summary.results.append(FileFixResult(path=e.path, error=e.reason))
            continue

        if result.replacements:
            action = "Would update" if dry_run else "Updated"
            logger.info("%s %s (%d references)", action, result.path, result.replacements)
        summary.results.append(result)

    return summary
