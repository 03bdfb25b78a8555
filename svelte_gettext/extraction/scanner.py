"""Line-oriented scanner for gettext/ngettext calls in Svelte templates."""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Union

from ..models.extraction import Kind, Location, RawOccurrence

logger = logging.getLogger(__name__)

_ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)


def unescape(value: str) -> str:
    """Replace every backslash-escaped character with the character itself."""
    return _ESCAPE_PATTERN.sub(lambda m: m.group(1), value)


def _string_literal(name: str) -> str:
    """
    Pattern for a single- or double-quoted literal captured as ``<name>_dq``
    or ``<name>_sq``. A backslash escapes any character, so an escaped quote
    never closes the literal.
    """
    return (
        rf'(?:"(?P<{name}_dq>(?:[^"\\]|\\.)*)"'
        rf"|'(?P<{name}_sq>(?:[^'\\]|\\.)*)')"
    )


def _literal_value(match: "re.Match[str]", name: str) -> str:
    raw = match.group(f"{name}_dq")
    if raw is None:
        raw = match.group(f"{name}_sq")
    return unescape(raw)


class Scanner:
    """
    Finds translation marker calls in template source text.

    Recognized forms (each call must sit on a single line):
    - gettext("msgid")
    - gettext('msgid', {name: value})
    - ngettext("singular", "plural", count)

    Calls inside comment regions (``<!-- ... -->`` by default) are ignored.
    """

    def __init__(
        self,
        simple_marker: str = "gettext",
        plural_marker: str = "ngettext",
        comment_start: str = "<!--",
        comment_end: str = "-->",
    ):
        """
        Initialize the scanner.

        Args:
            simple_marker: Function name of the single-string marker
            plural_marker: Function name of the singular/plural marker
            comment_start: Token opening a comment region
            comment_end: Token closing a comment region
        """
        self.simple_marker = simple_marker
        self.plural_marker = plural_marker
        self.comment_start = comment_start
        self.comment_end = comment_end

        # The marker must not be the tail of a longer identifier, otherwise
        # "gettext(" would also match inside "ngettext(".
        boundary = r"(?<![\w$])"
        self.simple_pattern = re.compile(
            boundary
            + re.escape(simple_marker)
            + r"\s*\(\s*"
            + _string_literal("msgid")
            + r"(?:\s*,\s*\{[^}]*\})?\s*\)"
        )
        self.plural_pattern = re.compile(
            boundary
            + re.escape(plural_marker)
            + r"\s*\(\s*"
            + _string_literal("msgid")
            + r"\s*,\s*"
            + _string_literal("plural")
            + r"\s*,"
        )
        self.comment_pattern = re.compile(
            re.escape(comment_start) + r".*?" + re.escape(comment_end), re.DOTALL
        )

    def strip_comments(self, content: str) -> str:
        """
        Remove comment regions, keeping the newlines they spanned.

        Every line outside a comment keeps its original line number.
        """
        return self.comment_pattern.sub(lambda m: "\n" * m.group(0).count("\n"), content)

    def scan(self, content: str, file_id: str) -> List[RawOccurrence]:
        """
        Extract all marker calls from source text.

        Args:
            content: Template source text
            file_id: File identifier recorded in each location

        Returns:
            Occurrences ordered by line, then by position within the line
        """
        occurrences = []
        stripped = self.strip_comments(content)

        for line_number, line in enumerate(stripped.split("\n"), start=1):
            found = []
            for match in self.simple_pattern.finditer(line):
                found.append((match.start(), RawOccurrence(
                    msgid=_literal_value(match, "msgid"),
                    kind=Kind.GETTEXT,
                    location=Location(file_id, line_number),
                )))
            for match in self.plural_pattern.finditer(line):
                found.append((match.start(), RawOccurrence(
                    msgid=_literal_value(match, "msgid"),
                    kind=Kind.NGETTEXT,
                    plural=_literal_value(match, "plural"),
                    location=Location(file_id, line_number),
                )))
            found.sort(key=lambda item: item[0])
            occurrences.extend(occurrence for _, occurrence in found)

        return occurrences

    def scan_file(
        self, file_path: Union[str, Path], root: Optional[Union[str, Path]] = None
    ) -> List[RawOccurrence]:
        """
        Extract marker calls from a file on disk.

        Unreadable files yield no occurrences rather than an error.

        Args:
            file_path: Path to the template file
            root: Directory that absolute paths are made relative to
                (defaults to the current working directory)
        """
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable file %s: %s", file_path, e)
            return []

        return self.scan(content, make_path_relative(file_path, root))


def make_path_relative(file_path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> str:
    """Make ``file_path`` relative to ``root`` when it lives underneath it."""
    path = str(file_path)
    base = str(root) if root is not None else os.getcwd()
    if os.path.isabs(path):
        try:
            relative = os.path.relpath(path, base)
        except ValueError:
            return path
        if relative != os.pardir and not relative.startswith(os.pardir + os.sep):
            return Path(relative).as_posix()
    return path
