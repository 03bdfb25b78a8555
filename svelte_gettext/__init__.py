"""Gettext extraction for Svelte templates."""

__version__ = "0.1.0"
