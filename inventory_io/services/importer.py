from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..config.loader import InventoryIOConfig
from ..excel.reader import ImportFileError, check_file, read_table
from ..logging.error_log import ErrorLogBuffer
from ..models.category import Category
from ..models.error_record import FILE_REJECTED, ErrorRecord
from ..models.import_result import ImportResult
from ..models.row_data import RawRow
from .progress import ProgressTracker
from .reconciler import HeaderFormatError, check_header, reconcile

"""File-level import orchestration.

Steps for one file:
1. Size/type guard (fatal)
2. Decode into RawRows (fatal on unreadable file)
3. Header check (fatal)
4. Reconcile in ``batch_size`` slices, merging partial results
5. Record every rejected row in the JSON Lines error log and flush once

The category catalog must be fetched by the caller before calling in.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Whole-file failure; no partial result is produced."""


def iter_batches(rows: Sequence[RawRow], size: int) -> Iterator[tuple[int, Sequence[RawRow]]]:
    """Yield ``(offset, slice)`` pairs of at most ``size`` rows."""
    if size < 1:
        raise ValueError("batch size must be >= 1")
    for offset in range(0, len(rows), size):
        yield offset, rows[offset:offset + size]


def reconcile_in_batches(
    rows: Sequence[RawRow],
    catalog: Sequence[Category],
    batch_size: int,
    *,
    description: str = "Importing rows",
) -> ImportResult:
    """Reconcile ``rows`` slice by slice; equivalent to a single ``reconcile`` call."""
    check_header(rows)
    result = ImportResult()
    with ProgressTracker(len(rows), description=description) as progress:
        for offset, batch in iter_batches(rows, batch_size):
            result.merge(reconcile(batch, catalog, start_index=offset + 1))
            progress.advance(len(batch))
            progress.set_postfix(valid=result.successful, invalid=result.failed)
    return result


def _reject(error_log: ErrorLogBuffer, file_name: str, message: str) -> ProcessingError:
    error_log.append(ErrorRecord.create(file=file_name, row=-1, error_type=FILE_REJECTED, message=message))
    error_log.flush()
    return ProcessingError(message)


def import_file(
    path: Path,
    catalog: Sequence[Category],
    config: InventoryIOConfig,
    error_log: ErrorLogBuffer | None = None,
) -> ImportResult:
    """Import one spreadsheet file against ``catalog``.

    Args:
        path: .xlsx / .xls / .csv file
        catalog: Current category catalog
        config: Limits, batch size and error log location
        error_log: Buffer to record rejected rows (one per run by default)

    Returns:
        ImportResult for the whole file

    Raises:
        ProcessingError: For oversized, disallowed, unreadable or headerless files
    """
    if error_log is None:
        error_log = ErrorLogBuffer(config.error_log_dir)

    try:
        check_file(path, config.max_file_bytes, config.allowed_extensions)
        rows = read_table(path)
    except ImportFileError as e:
        raise _reject(error_log, path.name, str(e)) from e
    logger.debug(f"read {len(rows)} rows from {path.name}")

    try:
        result = reconcile_in_batches(
            rows, catalog, config.batch_size, description=f"Importing {path.name}"
        )
    except HeaderFormatError as e:
        raise _reject(error_log, path.name, str(e)) from e

    for item in result.invalid_items:
        error_log.append(
            ErrorRecord.create(
                file=path.name,
                row=item.row_index,
                error_type=item.error_type,
                message=item.error,
            )
        )
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    return result
