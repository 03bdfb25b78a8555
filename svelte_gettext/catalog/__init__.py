"""PO/POT catalog handling: writing, reference fixing and lookup tables."""

from .pot_writer import POTWriter
from .reference_fixer import (
    CatalogFileError,
    find_catalog_files,
    fix_reference_file,
    fix_reference_files,
)
from .reference_rewriter import (
    ReferenceRewriter,
    RewriteResult,
    build_reference_map,
    format_reference_line,
    unescape_po,
)
from .translations import build_translations, load_catalog

__all__ = [
    "POTWriter",
    "CatalogFileError",
    "find_catalog_files",
    "fix_reference_file",
    "fix_reference_files",
    "ReferenceRewriter",
    "RewriteResult",
    "build_reference_map",
    "format_reference_line",
    "unescape_po",
    "build_translations",
    "load_catalog",
]
