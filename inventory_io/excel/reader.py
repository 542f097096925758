from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.row_data import RawRow

"""Tabular file decoding (xlsx / xls / csv -> list of RawRow).

- The first row is the header; each following row becomes a dict keyed by the
  header text exactly as written in the file.
- Blank cells become None; rows where every cell is blank are skipped.
- numpy / pandas scalars are converted to plain Python values so the engine
  never sees library types.

``check_file`` is the size/type guard and must run before ``read_table``.
"""

__all__ = [
    "ImportFileError",
    "FileTooLargeError",
    "UnsupportedFileTypeError",
    "FileReadError",
    "check_file",
    "read_table",
]

EXCEL_EXTENSIONS = (".xlsx", ".xls")
CSV_EXTENSIONS = (".csv",)


class ImportFileError(Exception):
    """Base class for whole-file import failures."""


class FileTooLargeError(ImportFileError):
    """Raised when the file exceeds the configured byte limit."""


class UnsupportedFileTypeError(ImportFileError):
    """Raised when the file extension is not in the allow-list."""


class FileReadError(ImportFileError):
    """Raised when the file cannot be decoded as a table."""


def check_file(path: Path, max_bytes: int, allowed_extensions: tuple[str, ...]) -> None:
    """Reject files that are too large or of a disallowed type.

    Raises:
        FileReadError: If the file does not exist
        UnsupportedFileTypeError: If the extension is not allowed
        FileTooLargeError: If the file is larger than ``max_bytes``
    """
    if not path.is_file():
        raise FileReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in allowed_extensions:
        raise UnsupportedFileTypeError(
            f"unsupported file type '{suffix or path.name}' (allowed: {', '.join(allowed_extensions)})"
        )
    size = path.stat().st_size
    if size > max_bytes:
        raise FileTooLargeError(f"file is {size} bytes, limit is {max_bytes} bytes")


def _to_python(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return value.item()
    return value


def _frame_to_rows(df: pd.DataFrame) -> list[RawRow]:
    # Header text is kept as written; normalization trims it later.
    columns = [str(c) for c in df.columns]
    rows: list[RawRow] = []
    for values in df.itertuples(index=False, name=None):
        row = {col: _to_python(val) for col, val in zip(columns, values, strict=False)}
        if all(v is None for v in row.values()):
            continue
        rows.append(row)
    return rows


def read_table(path: Path) -> list[RawRow]:
    """Decode the first sheet (or the CSV body) of ``path`` into rows.

    Raises:
        UnsupportedFileTypeError: If the extension is neither Excel nor CSV
        FileReadError: If pandas cannot parse the file
    """
    suffix = path.suffix.lower()
    try:
        if suffix in CSV_EXTENSIONS:
            # dtype=str: 数値変換はバリデータ側で行う
            df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        elif suffix in EXCEL_EXTENSIONS:
            df = pd.read_excel(path, sheet_name=0, dtype=object)
        else:
            raise UnsupportedFileTypeError(f"unsupported file type '{suffix}'")
    except pd.errors.EmptyDataError:
        return []
    except (ValueError, OSError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise FileReadError(f"failed to read {path.name}: {e}") from e
    return _frame_to_rows(df)
