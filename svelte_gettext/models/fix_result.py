"""Data models for reference-fixing results."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FileFixResult:
    """Represents the outcome of fixing references in one catalog file."""

    path: str
    replacements: int = 0
    modified: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        """Check if the file was processed without an I/O error."""
        return self.error is None


@dataclass
class FixSummary:
    """Aggregated results for a batch of catalog files."""

    results: List[FileFixResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total_replacements(self) -> int:
        return sum(r.replacements for r in self.results)

    @property
    def files_modified(self) -> int:
        return sum(1 for r in self.results if r.modified)

    @property
    def succeeded(self) -> List[FileFixResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[FileFixResult]:
        return [r for r in self.results if not r.success]
