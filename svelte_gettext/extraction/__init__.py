"""String extraction from Svelte template files."""

from .scanner import Scanner, make_path_relative, unescape
from .reducer import extract_all, find_source_files, reduce_occurrences

__all__ = [
    "Scanner",
    "make_path_relative",
    "unescape",
    "extract_all",
    "find_source_files",
    "reduce_occurrences",
]
