from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""Category catalog model.

The catalog is supplied by the caller (typically fetched from the persistence
layer before an import run). Entries are immutable; the engine only reads them.
"""

__all__ = [
    "Category",
    "catalog_from_records",
]


@dataclass(frozen=True)
class Category:
    """One entry of the category catalog."""
    id: str
    name: str
    color: str = ""
    icon: str | None = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Category:
        """Build a Category from a loosely typed mapping (YAML/JSON record).

        Raises:
            ValueError: If ``id`` or ``name`` is missing
        """
        if data.get("id") is None or not data.get("name"):
            raise ValueError(f"category record requires 'id' and 'name': {dict(data)!r}")
        icon = data.get("icon")
        return Category(
            id=str(data["id"]),
            name=str(data["name"]),
            color=str(data.get("color") or ""),
            icon=str(icon) if icon is not None else None,
        )


def catalog_from_records(records: list[Mapping[str, Any]]) -> list[Category]:
    """Convert raw records into a catalog, preserving order."""
    return [Category.from_dict(r) for r in records]
