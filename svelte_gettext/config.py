"""Configuration management for the extraction pipeline."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Source templates
    svelte_path: str = field(default_factory=lambda: os.getenv("SVELTE_PATH", "assets/svelte"))
    source_extension: str = field(default_factory=lambda: os.getenv("SOURCE_EXTENSION", ".svelte"))

    # Gettext catalogs
    gettext_path: str = field(default_factory=lambda: os.getenv("GETTEXT_PATH", "priv/gettext"))
    pot_file: str = field(default_factory=lambda: os.getenv("POT_FILE", "default.pot"))
    project: str = field(default_factory=lambda: os.getenv("PROJECT_ID_VERSION", "PROJECT VERSION"))

    # Generated module the host extractor attributes strings to
    intermediate_marker: str = field(
        default_factory=lambda: os.getenv("INTERMEDIATE_MARKER", "svelte_strings.ex")
    )

    # Marker and comment tokens
    simple_marker: str = field(default_factory=lambda: os.getenv("SIMPLE_MARKER", "gettext"))
    plural_marker: str = field(default_factory=lambda: os.getenv("PLURAL_MARKER", "ngettext"))
    comment_start: str = field(default_factory=lambda: os.getenv("COMMENT_START", "<!--"))
    comment_end: str = field(default_factory=lambda: os.getenv("COMMENT_END", "-->"))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def pot_path(self) -> Path:
        """Full path of the POT template."""
        return Path(self.gettext_path) / self.pot_file

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if not self.svelte_path:
            errors.append("SVELTE_PATH is not set")
        if not self.simple_marker or not self.plural_marker:
            errors.append("Marker names must not be empty")
        if self.simple_marker == self.plural_marker:
            errors.append("SIMPLE_MARKER and PLURAL_MARKER must differ")
        if not self.comment_start or not self.comment_end:
            errors.append("Comment delimiters must not be empty")
        return errors


# Global config instance
config = Config()
