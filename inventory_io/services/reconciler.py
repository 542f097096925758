from __future__ import annotations

from collections.abc import Sequence

from ..models.category import Category
from ..models.error_record import CATEGORY_NOT_FOUND
from ..models.import_result import ImportResult
from ..models.row_data import InvalidItem, RawRow, ValidItem
from .category_resolver import is_blank_category, resolve_category
from .field_normalizer import FIELD_ALIASES, has_name_column, normalize_row
from .row_validator import RowValidationError, validate_row

"""Import reconciliation: raw table + catalog -> partitioned ImportResult.

Per-row problems (missing name, bad quantity, unknown category) never abort
the run; they land in ``invalid_items`` with a message and the 1-based row
number. Only a table without any name-like column is rejected as a whole, via
HeaderFormatError.

The reconciler performs no I/O and keeps no state between calls.
"""

__all__ = [
    "HeaderFormatError",
    "check_header",
    "reconcile",
]


class HeaderFormatError(Exception):
    """Raised when the table is empty or has no recognizable name column."""


def check_header(rows: Sequence[RawRow]) -> None:
    """Reject tables that cannot be inventory data.

    Raises:
        HeaderFormatError: If ``rows`` is empty or its first row has no
            column that normalizes to ``name``
    """
    if not rows:
        raise HeaderFormatError("No valid data found in file")
    if not has_name_column(rows[0]):
        accepted = ", ".join(FIELD_ALIASES["name"])
        raise HeaderFormatError(
            f"Unrecognized header format: no item name column found (expected one of: {accepted})"
        )


def reconcile(
    rows: Sequence[RawRow],
    catalog: Sequence[Category],
    *,
    start_index: int = 1,
) -> ImportResult:
    """Normalize, validate and category-resolve every row of a table.

    Args:
        rows: Decoded rows in file order
        catalog: Categories available at the time of the import
        start_index: Row number of ``rows[0]``; lets a caller reconcile a
            large table in slices while keeping file row numbers

    Returns:
        ImportResult where ``successful + failed == len(rows)``

    Raises:
        HeaderFormatError: See ``check_header``
    """
    check_header(rows)
    result = ImportResult()

    for offset, raw_row in enumerate(rows):
        row_index = start_index + offset
        row = normalize_row(raw_row)

        try:
            fields = validate_row(row, row_index)
        except RowValidationError as e:
            result.invalid_items.append(InvalidItem(row_index=row_index, row=row, error=str(e)))
            continue

        category_name = fields["category"]
        category = resolve_category(category_name, catalog)
        if category is None and not is_blank_category(category_name):
            result.invalid_items.append(
                InvalidItem(
                    row_index=row_index,
                    row=row,
                    error=f'Category "{category_name}" not found',
                    error_type=CATEGORY_NOT_FOUND,
                )
            )
            result.add_missing_category(category_name)
            continue

        result.valid_items.append(
            ValidItem(
                row_index=row_index,
                category_id=category.id if category is not None else None,
                **fields,
            )
        )

    return result
