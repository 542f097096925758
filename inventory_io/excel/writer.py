from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd

"""Tabular file encoding (rows -> xlsx / csv)."""

__all__ = [
    "write_table",
]

SHEET_NAME = "Inventory"


def write_table(
    rows: Sequence[dict[str, Any]],
    path: Path,
    columns: Sequence[str] | None = None,
) -> Path:
    """Write rows to ``path``; the format follows the extension (.xlsx or .csv).

    ``columns`` fixes the header order (and lets an empty table keep its
    header). Defaults to the keys of the first row.

    Raises:
        ValueError: For any other extension
    """
    if columns is None:
        columns = list(rows[0].keys()) if rows else []
    df = pd.DataFrame(list(rows), columns=list(columns))
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".xlsx":
        df.to_excel(path, index=False, sheet_name=SHEET_NAME)
    elif suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        raise ValueError(f"unsupported output format: {suffix}")
    return path
