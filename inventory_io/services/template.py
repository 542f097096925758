from __future__ import annotations

import copy

from ..models.row_data import RawRow

"""Import template rows.

The template is written with the same column conventions the importer reads,
so a downloaded template re-imports unchanged (given the named categories
exist in the catalog).
"""

__all__ = [
    "TEMPLATE_ROWS",
    "generate_template",
]

TEMPLATE_ROWS: tuple[RawRow, ...] = (
    {
        "name": "Copy Paper (Letter)",
        "quantity": 40,
        "minimum_quantity": 10,
        "category": "Office Supplies",
        "description": "White 8.5x11 copy paper, 500 sheets per ream",
        "unit": "ream",
        "location_details": "Supply Room B, Shelf 2",
        "preferred_vendor": "Staples",
        "status": "active",
        "notes": "Reorder in cases of 10",
    },
    {
        "name": "LED Tube 4ft",
        "quantity": 24,
        "minimum_quantity": 6,
        "category": "Lighting",
        "description": "T8 LED replacement tube, 4000K",
        "unit": "each",
        "location_details": "Basement Storage, Cage 1",
        "preferred_vendor": "Grainger",
        "status": "active",
        "notes": "Used for hallway fixtures",
    },
    {
        "name": "Hand Sanitizer",
        "quantity": 12,
        "minimum_quantity": 4,
        "category": "Cleaning Supplies",
        "description": "8 oz pump bottle",
        "unit": "bottle",
        "location_details": "Janitorial Closet 3F",
        "preferred_vendor": "",
        "status": "active",
        "notes": "",
    },
)


def generate_template() -> list[RawRow]:
    """Return fresh copies of the example rows."""
    return copy.deepcopy(list(TEMPLATE_ROWS))
