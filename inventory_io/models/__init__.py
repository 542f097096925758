"""Domain models for the inventory import/export engine.

This package contains the record types exchanged between the field
normalizer, row validator, category resolver, reconciler and exporter.
"""

from .category import Category
from .error_record import ErrorRecord
from .import_result import ImportResult
from .inventory_item import InventoryItem
from .row_data import InvalidItem, NormalizedRow, RawRow, ValidItem

__all__ = [
    # Catalog / domain
    "Category",
    "InventoryItem",
    # Reconciliation
    "RawRow",
    "NormalizedRow",
    "ValidItem",
    "InvalidItem",
    "ImportResult",
    # Diagnostics
    "ErrorRecord",
]
