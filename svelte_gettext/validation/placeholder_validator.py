"""Validator for %{name} interpolation placeholders."""

import re
from typing import List, Tuple
from dataclasses import dataclass


@dataclass
class PlaceholderIssue:
    """Represents a placeholder validation issue."""

    error_type: str  # missing, extra
    message: str
    severity: str  # critical, warning


class PlaceholderValidator:
    """
    Validates that interpolation bindings survive translation.

    Svelte strings interpolate named bindings at runtime:
    - %{name} - replaced by the ``name`` binding
    - %{count} - plural count, conventionally
    """

    PLACEHOLDER_PATTERN = re.compile(r"%\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)\}")

    def validate(self, source: str, translation: str) -> Tuple[bool, List[PlaceholderIssue]]:
        """
        Validate that placeholders in source match those in translation.

        Args:
            source: Original source text
            translation: Translated text

        Returns:
            Tuple of (is_valid, list of issues)
        """
        issues = []

        source_set = set(self.extract_placeholders(source))
        trans_set = set(self.extract_placeholders(translation))

        for name in sorted(source_set - trans_set):
            issues.append(
                PlaceholderIssue(
                    error_type="missing",
                    message=f"Missing placeholder in translation: %{{{name}}}",
                    severity="critical",
                )
            )

        # A binding the source never provides renders literally
        for name in sorted(trans_set - source_set):
            issues.append(
                PlaceholderIssue(
                    error_type="extra",
                    message=f"Extra placeholder in translation: %{{{name}}}",
                    severity="critical",
                )
            )

        is_valid = not any(issue.severity == "critical" for issue in issues)
        return is_valid, issues

    def validate_plural(self, singular: str, plural: str) -> Tuple[bool, List[PlaceholderIssue]]:
        """
        Check that a plural form uses the same bindings as its singular.

        The singular may omit the count binding ("One item" / "%{count} items"),
        so only bindings missing from the plural are critical.
        """
        issues = []
        singular_set = set(self.extract_placeholders(singular))
        plural_set = set(self.extract_placeholders(plural))

        for name in sorted(singular_set - plural_set):
            issues.append(
                PlaceholderIssue(
                    error_type="missing",
                    message=f"Plural form drops placeholder: %{{{name}}}",
                    severity="critical",
                )
            )
        for name in sorted(plural_set - singular_set):
            issues.append(
                PlaceholderIssue(
                    error_type="extra",
                    message=f"Plural form adds placeholder: %{{{name}}}",
                    severity="warning",
                )
            )

        is_valid = not any(issue.severity == "critical" for issue in issues)
        return is_valid, issues

    def extract_placeholders(self, text: str) -> List[str]:
        """Extract binding names in order of appearance."""
        return [m.group("name") for m in self.PLACEHOLDER_PATTERN.finditer(text)]

    def has_placeholders(self, text: str) -> bool:
        """Check if text contains any placeholders."""
        return bool(self.PLACEHOLDER_PATTERN.search(text))
