from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

import pandas as pd

from ..models.inventory_item import InventoryItem

"""Export serialization: inventory items -> tabular rows.

Rows carry exactly the selected fields, always in EXPORT_FIELDS order no
matter how the caller ordered its selection. ``category`` and
``last_updated`` are computed; everything else is copied with None written
as an empty cell.
"""

__all__ = [
    "DEFAULT_CATEGORY_NAME",
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_EXPORT_FIELDS",
    "EXPORT_FIELDS",
    "export_filename",
    "format_date",
    "serialize",
]

EXPORT_FIELDS: tuple[str, ...] = (
    "name",
    "quantity",
    "minimum_quantity",
    "category",
    "description",
    "unit",
    "location_details",
    "preferred_vendor",
    "notes",
    "status",
    "last_updated",
)

# Pre-selected in the export dialog
DEFAULT_EXPORT_FIELDS: frozenset[str] = frozenset(EXPORT_FIELDS) - {"preferred_vendor", "notes"}

DEFAULT_CATEGORY_NAME = "General"
DEFAULT_DATE_FORMAT = "%m/%d/%Y"


def format_date(value: datetime | date | str | None, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a timestamp for display; empty string when absent or unparseable."""
    if value is None or value == "":
        return ""
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError):
        return ""
    if pd.isna(ts):
        return ""
    return ts.strftime(date_format)


def _cell(value: Any) -> Any:
    return "" if value is None else value


def serialize(
    items: Iterable[InventoryItem],
    selected_fields: Iterable[str],
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> list[dict[str, Any]]:
    """Project items onto the selected fields.

    Raises:
        ValueError: If a selected field is not one of EXPORT_FIELDS
    """
    selected = set(selected_fields)
    unknown = selected - set(EXPORT_FIELDS)
    if unknown:
        raise ValueError(f"unknown export fields: {sorted(unknown)}")
    fields: Sequence[str] = [f for f in EXPORT_FIELDS if f in selected]

    rows: list[dict[str, Any]] = []
    for item in items:
        row: dict[str, Any] = {}
        for field in fields:
            if field == "category":
                row[field] = item.category.name if item.category else DEFAULT_CATEGORY_NAME
            elif field == "last_updated":
                row[field] = format_date(item.updated_at, date_format)
            else:
                row[field] = _cell(getattr(item, field))
        rows.append(row)
    return rows


def export_filename(prefix: str = "inventory_export", day: date | None = None, extension: str = "xlsx") -> str:
    """Build the export file name with the export date embedded.

    >>> export_filename(day=date(2024, 3, 5))
    'inventory_export_2024-03-05.xlsx'
    """
    day = day or date.today()
    return f"{prefix}_{day.isoformat()}.{extension.lstrip('.')}"
