from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .category import Category

"""InventoryItem domain model (the item shape handed to the exporter).

Items come from the external store with their category joined in, the same
way the storage layer returns ``inventory_items`` rows with a nested
``category`` object.
"""

__all__ = [
    "InventoryItem",
]


@dataclass(frozen=True)
class InventoryItem:
    """Stored inventory item as seen by the export path."""
    id: str
    name: str
    quantity: int | float = 0
    minimum_quantity: int | float | None = None
    category_id: str | None = None
    category: Category | None = None
    description: str | None = None
    unit: str | None = None
    location_details: str | None = None
    preferred_vendor: str | None = None
    notes: str | None = None
    status: str = "active"
    updated_at: datetime | str | None = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> InventoryItem:
        """Build an item from a JSON/YAML record.

        ``category`` may be a nested category mapping; ``updated_at`` is kept as
        given (ISO string or datetime) and parsed at export time.
        """
        raw_category = data.get("category")
        category = (
            Category.from_dict(raw_category) if isinstance(raw_category, Mapping) else None
        )
        category_id = data.get("category_id")
        if category_id is None and category is not None:
            category_id = category.id
        return InventoryItem(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            quantity=data.get("quantity", 0),
            minimum_quantity=data.get("minimum_quantity"),
            category_id=str(category_id) if category_id is not None else None,
            category=category,
            description=data.get("description"),
            unit=data.get("unit"),
            location_details=data.get("location_details"),
            preferred_vendor=data.get("preferred_vendor"),
            notes=data.get("notes"),
            status=data.get("status") or "active",
            updated_at=data.get("updated_at"),
        )
