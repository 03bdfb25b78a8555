"""End-to-end extraction and reference-fixing runs."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .catalog.pot_writer import POTWriter
from .catalog.reference_fixer import find_catalog_files, fix_reference_files
from .catalog.reference_rewriter import ReferenceRewriter, build_reference_map
from .config import Config
from .extraction.reducer import extract_all, find_source_files
from .extraction.scanner import Scanner
from .models.extraction import ExtractionUnit
from .models.fix_result import FixSummary

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Output of one catalog build."""

    files: List[Path] = field(default_factory=list)
    units: List[ExtractionUnit] = field(default_factory=list)
    pot_path: Optional[Path] = None

    @property
    def plural_count(self) -> int:
        return sum(1 for u in self.units if u.is_plural)

    @property
    def reference_count(self) -> int:
        return sum(len(u.locations) for u in self.units)


def make_scanner(cfg: Config) -> Scanner:
    """Build a scanner from the configured marker and comment tokens."""
    return Scanner(
        simple_marker=cfg.simple_marker,
        plural_marker=cfg.plural_marker,
        comment_start=cfg.comment_start,
        comment_end=cfg.comment_end,
    )


def build_catalog(cfg: Config, extracting: bool = False) -> BuildResult:
    """
    Scan the template directory and reduce the results.

    Args:
        cfg: Configuration to run with
        extracting: When True, also write the POT template. This is scoped to
            a single call; nothing global is toggled.

    Returns:
        BuildResult with the scanned files and extracted units
    """
    files = find_source_files(cfg.svelte_path, cfg.source_extension)
    logger.info("Scanning %d %s files in %s", len(files), cfg.source_extension, cfg.svelte_path)

    units = extract_all(files, scanner=make_scanner(cfg))
    result = BuildResult(files=files, units=units)

    if extracting:
        writer = POTWriter(project=cfg.project)
        result.pot_path = writer.write(units, cfg.pot_path)
        logger.info("Wrote %d entries to %s", len(units), result.pot_path)

    return result


def fix_references(
    cfg: Config,
    dry_run: bool = False,
    units: Optional[List[ExtractionUnit]] = None,
) -> FixSummary:
    """
    Point intermediate-module references in every PO/POT file back at the
    original templates.

    Args:
        cfg: Configuration to run with
        dry_run: Report what would change without writing
        units: Previously extracted units; extracted afresh when omitted
    """
    if units is None:
        units = build_catalog(cfg).units

    reference_map = build_reference_map(units)
    logger.info("Built reference map with %d entries", len(reference_map))

    po_files = find_catalog_files(cfg.gettext_path)
    logger.info("Found %d PO/POT files in %s", len(po_files), cfg.gettext_path)

    rewriter = ReferenceRewriter(intermediate_marker=cfg.intermediate_marker)
    return fix_reference_files(po_files, reference_map, rewriter=rewriter, dry_run=dry_run)
