"""Runtime translation table for the browser-side gettext helpers."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import polib

from ..models.extraction import ExtractionUnit
from ..validation.placeholder_validator import PlaceholderValidator

logger = logging.getLogger(__name__)

PLURAL_SEPARATOR = "|||"


def load_catalog(po_path: Union[str, Path]) -> Dict[Tuple[str, Optional[str]], polib.POEntry]:
    """
    Index translated entries of a PO file by (msgid, msgid_plural).

    Obsolete and fuzzy entries are skipped.

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(po_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {po_path}")

    po = polib.pofile(str(path))
    index = {}
    for entry in po:
        if entry.obsolete or entry.fuzzy:
            continue
        index[(entry.msgid, entry.msgid_plural or None)] = entry
    return index


def build_translations(
    units: Iterable[ExtractionUnit],
    po_path: Optional[Union[str, Path]] = None,
    validator: Optional[PlaceholderValidator] = None,
) -> Dict[str, Any]:
    """
    Build the lookup table consumed by the browser runtime.

    Simple strings map ``msgid -> translation``. Plural pairs map
    ``"msgid|||plural" -> {"one": ..., "other": ...}``. Untranslated strings
    fall back to the source text, so a table built without a PO file holds
    the untranslated strings.

    Args:
        units: Extracted strings
        po_path: Optional locale PO file to read translations from
        validator: Placeholder validator used to warn about broken bindings

    Returns:
        JSON-serializable dictionary
    """
    catalog = load_catalog(po_path) if po_path else {}
    validator = validator or PlaceholderValidator()
    table: Dict[str, Any] = {}

    for unit in units:
        if unit.is_plural:
            entry = catalog.get((unit.msgid, unit.plural))
            one, other = unit.msgid, unit.plural
            if entry is not None:
                # Index 0/1 is the gettext convention for one/other; locales
                # with more forms need CLDR-aware selection on the client.
                one = _plural_form(entry, 0) or one
                other = _plural_form(entry, 1) or other
                _warn_on_placeholders(validator, unit.plural, other, unit.lookup_key)
            table[unit.lookup_key] = {"one": one, "other": other}
        else:
            entry = catalog.get((unit.msgid, None))
            if entry is not None and entry.msgstr:
                _warn_on_placeholders(validator, unit.msgid, entry.msgstr, unit.lookup_key)
                table[unit.lookup_key] = entry.msgstr
            else:
                table[unit.lookup_key] = unit.msgid

    return table


def _warn_on_placeholders(
    validator: PlaceholderValidator, source: str, translation: str, key: str
) -> None:
    is_valid, issues = validator.validate(source, translation)
    if not is_valid:
        for issue in issues:
            logger.warning("%s: %s", key, issue.message)


def _plural_form(entry: polib.POEntry, index: int) -> str:
    forms = entry.msgstr_plural
    return forms.get(index) or forms.get(str(index)) or ""
