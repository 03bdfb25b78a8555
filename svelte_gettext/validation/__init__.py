"""Validation modules for extracted strings and translations."""

from .placeholder_validator import PlaceholderIssue, PlaceholderValidator

__all__ = ["PlaceholderIssue", "PlaceholderValidator"]
