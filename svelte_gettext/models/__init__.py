"""Data models for the extraction pipeline."""

from .extraction import EntryKey, ExtractionUnit, Kind, Location, RawOccurrence, entry_key
from .fix_result import FileFixResult, FixSummary

__all__ = [
    "EntryKey",
    "ExtractionUnit",
    "Kind",
    "Location",
    "RawOccurrence",
    "entry_key",
    "FileFixResult",
    "FixSummary",
]
