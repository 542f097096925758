from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..models.row_data import NormalizedRow, RawRow

"""Column-name normalization.

Spreadsheet headers arrive in whatever spelling the user typed ("Qty",
"Reorder Level", "Item Name"). Each header is cleaned (trim, lowercase,
whitespace runs -> "_", anything outside [a-z0-9_] removed) and then mapped to
a canonical field through FIELD_ALIASES. Adding a spelling is a change to the
table below, nothing else.
"""

__all__ = [
    "CANONICAL_FIELDS",
    "FIELD_ALIASES",
    "clean_key",
    "normalize_key",
    "normalize_row",
    "has_name_column",
]

# canonical field -> accepted (cleaned) spellings
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "item_name", "item", "product_name", "product"),
    "quantity": ("quantity", "qty", "amount", "stock"),
    "minimum_quantity": ("minimum_quantity", "min_quantity", "minimum", "min", "reorder_level"),
    "category": ("category", "category_name", "item_category"),
    "description": ("description", "desc", "details"),
    "unit": ("unit", "units", "uom", "unit_of_measure"),
    "location_details": ("location_details", "location", "storage_location"),
    "preferred_vendor": ("preferred_vendor", "vendor", "supplier"),
    "status": ("status", "item_status"),
    "notes": ("notes", "note", "comments", "remarks"),
}

CANONICAL_FIELDS: tuple[str, ...] = tuple(FIELD_ALIASES)

# Reverse lookup built once at import time
_ALIAS_INDEX: dict[str, str] = {
    alias: canonical for canonical, aliases in FIELD_ALIASES.items() for alias in aliases
}

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_CHARS_RE = re.compile(r"[^a-z0-9_]")


def clean_key(raw_key: Any) -> str:
    """Lowercase, underscore whitespace runs and strip other characters."""
    key = str(raw_key).strip().lower()
    key = _WHITESPACE_RE.sub("_", key)
    return _INVALID_CHARS_RE.sub("", key)


def normalize_key(raw_key: Any) -> str:
    """Map a source column name to its canonical field.

    Unrecognized names are returned in cleaned form (pass-through).

    Examples:
        >>> normalize_key(" QTY ")
        'quantity'
        >>> normalize_key("Reorder Level")
        'minimum_quantity'
        >>> normalize_key("Shelf #")
        'shelf_'
    """
    cleaned = clean_key(raw_key)
    return _ALIAS_INDEX.get(cleaned, cleaned)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    # NaN is the only value not equal to itself
    return isinstance(value, float) and value != value


def normalize_row(raw_row: Mapping[str, Any]) -> NormalizedRow:
    """Rekey a raw row by canonical field, dropping unrecognized columns.

    When several source columns map to the same field ("Qty" and "Stock") the
    first non-blank value in column order is kept.
    """
    row: NormalizedRow = {}
    for raw_key, value in raw_row.items():
        field = normalize_key(raw_key)
        if field not in FIELD_ALIASES:
            continue
        if field not in row or (_is_blank(row[field]) and not _is_blank(value)):
            row[field] = value
    return row


def has_name_column(raw_row: RawRow) -> bool:
    """True if any header of the row normalizes to ``name``."""
    return any(normalize_key(k) == "name" for k in raw_row)
