from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.category import Category

"""Category name resolution against the catalog.

Two tiers: an exact match on the trimmed, case-folded name, then a substring
match in either direction. Ties in the substring tier go to the first entry in
catalog order; "IT" against ["IT Equipment", "Security IT"] yields
"IT Equipment".
"""

__all__ = [
    "NO_CATEGORY_SENTINELS",
    "is_blank_category",
    "resolve_category",
]

# Values meaning "no category" (compared after trim + casefold)
NO_CATEGORY_SENTINELS: frozenset[str] = frozenset({"none"})


def _fold(value: str) -> str:
    return value.strip().casefold()


def is_blank_category(name: Any) -> bool:
    """True if ``name`` asks for the default category rather than a lookup."""
    if name is None:
        return True
    if isinstance(name, float) and name != name:  # NaN from pandas
        return True
    folded = _fold(str(name))
    return folded == "" or folded in NO_CATEGORY_SENTINELS


def resolve_category(name: Any, catalog: Sequence[Category]) -> Category | None:
    """Find the catalog entry for a free-text category name.

    Returns None both for blank input and for names with no match; use
    ``is_blank_category`` to tell the two apart.
    """
    if is_blank_category(name):
        return None
    wanted = _fold(str(name))

    for category in catalog:
        if _fold(category.name) == wanted:
            return category

    for category in catalog:
        candidate = _fold(category.name)
        if not candidate:
            continue
        if wanted in candidate or candidate in wanted:
            return category

    return None
