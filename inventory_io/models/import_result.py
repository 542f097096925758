from __future__ import annotations

from dataclasses import dataclass, field

from .row_data import InvalidItem, ValidItem

"""ImportResult model: terminal output of one reconciliation run."""

__all__ = [
    "ImportResult",
]


@dataclass
class ImportResult:
    """Partitioned outcome of reconciling one input table.

    ``missing_categories`` is deduplicated and keeps first-seen order.
    """
    valid_items: list[ValidItem] = field(default_factory=list)
    invalid_items: list[InvalidItem] = field(default_factory=list)
    missing_categories: list[str] = field(default_factory=list)

    @property
    def successful(self) -> int:
        return len(self.valid_items)

    @property
    def failed(self) -> int:
        return len(self.invalid_items)

    @property
    def total_rows(self) -> int:
        return self.successful + self.failed

    @property
    def errors(self) -> list[str]:
        """Error messages of rejected rows, in input order."""
        return [item.error for item in self.invalid_items]

    def add_missing_category(self, name: str) -> None:
        if name not in self.missing_categories:
            self.missing_categories.append(name)

    def merge(self, other: ImportResult) -> None:
        """Append another (later) partial result, e.g. the next batch."""
        self.valid_items.extend(other.valid_items)
        self.invalid_items.extend(other.invalid_items)
        for name in other.missing_categories:
            self.add_missing_category(name)
