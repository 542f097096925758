from __future__ import annotations

import math
import numbers
from typing import Any

from ..models.row_data import NormalizedRow

"""Per-row validation and type coercion.

Rules run in a fixed order and the first failure is reported:

1. name present and non-empty after trimming
2. quantity present
3. quantity a non-negative number
4. minimum_quantity, when given, a non-negative number

Other text fields are optional and trimmed. ``status`` falls back to "active";
its value is not checked here.
"""

__all__ = [
    "DEFAULT_STATUS",
    "OPTIONAL_TEXT_FIELDS",
    "RowValidationError",
    "ValidatedFields",
    "parse_number",
    "validate_row",
]

DEFAULT_STATUS = "active"

OPTIONAL_TEXT_FIELDS: tuple[str, ...] = (
    "description",
    "unit",
    "location_details",
    "preferred_vendor",
    "notes",
)

ValidatedFields = dict[str, Any]


class RowValidationError(ValueError):
    """Raised when a row fails one of the validation rules."""

    def __init__(self, row_index: int, message: str) -> None:
        super().__init__(f"Row {row_index}: {message}")
        self.row_index = row_index


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def parse_number(value: Any) -> int | float | None:
    """Parse a cell value as a finite number.

    Integral values come back as ``int``. Returns None if the value is not
    numeric (booleans included).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _optional_text(value: Any) -> str | None:
    if _is_missing(value):
        return None
    return str(value).strip()


def validate_row(row: NormalizedRow, row_index: int) -> ValidatedFields:
    """Validate one normalized row and return its typed fields.

    Args:
        row: Row keyed by canonical field names
        row_index: 1-based position of the row in the input table

    Returns:
        Mapping of canonical field -> coerced value. ``category`` is returned
        trimmed (or None) and left for the category resolver.

    Raises:
        RowValidationError: On the first rule the row breaks
    """
    name = row.get("name")
    if _is_missing(name):
        raise RowValidationError(row_index, "Name is required and must be a non-empty string")

    raw_quantity = row.get("quantity")
    if _is_missing(raw_quantity):
        raise RowValidationError(row_index, "Quantity is required")
    quantity = parse_number(raw_quantity)
    if quantity is None or quantity < 0:
        raise RowValidationError(row_index, "Quantity must be a non-negative number")

    minimum_quantity = None
    raw_minimum = row.get("minimum_quantity")
    if not _is_missing(raw_minimum):
        minimum_quantity = parse_number(raw_minimum)
        if minimum_quantity is None or minimum_quantity < 0:
            raise RowValidationError(row_index, "Minimum quantity must be a non-negative number")

    fields: ValidatedFields = {
        "name": str(name).strip(),
        "quantity": quantity,
        "minimum_quantity": minimum_quantity,
        "category": _optional_text(row.get("category")),
        "status": _optional_text(row.get("status")) or DEFAULT_STATUS,
    }
    for field in OPTIONAL_TEXT_FIELDS:
        fields[field] = _optional_text(row.get(field))
    return fields
