from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .error_record import ROW_INVALID

"""Row-level models for inventory reconciliation.

RawRow is one decoded spreadsheet row with whatever headers the source file
used. NormalizedRow carries only canonical field keys. ValidItem and
InvalidItem are the two partitions produced by the reconciler; every input
row ends up in exactly one of them.
"""

__all__ = [
    "RawRow",
    "NormalizedRow",
    "ValidItem",
    "InvalidItem",
]

RawRow = dict[str, Any]
NormalizedRow = dict[str, Any]


@dataclass(frozen=True)
class ValidItem:
    """A row that passed validation and category resolution.

    ``category_id`` is None when the row named no category; the caller then
    files the item under its default (General) category.
    """
    row_index: int  # 1-based position in the input table
    name: str
    quantity: int | float
    minimum_quantity: int | float | None = None
    category: str | None = None  # category text as written in the file
    category_id: str | None = None
    description: str | None = None
    unit: str | None = None
    location_details: str | None = None
    preferred_vendor: str | None = None
    notes: str | None = None
    status: str = "active"

    def to_record(self) -> dict[str, Any]:
        """Return the persistable fields (no row bookkeeping, no category text)."""
        return {
            "name": self.name,
            "quantity": self.quantity,
            "minimum_quantity": self.minimum_quantity,
            "category_id": self.category_id,
            "description": self.description,
            "unit": self.unit,
            "location_details": self.location_details,
            "preferred_vendor": self.preferred_vendor,
            "notes": self.notes,
            "status": self.status,
        }


@dataclass(frozen=True)
class InvalidItem:
    """A rejected row together with the reason it was rejected."""
    row_index: int  # 1-based position in the input table
    row: NormalizedRow
    error: str
    error_type: str = ROW_INVALID  # ROW_INVALID | CATEGORY_NOT_FOUND
