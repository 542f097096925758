from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pandas as pd
import pytest

from inventory_io.config.loader import default_config
from inventory_io.logging.error_log import ErrorLogBuffer
from inventory_io.services.importer import (
    ProcessingError,
    import_file,
    iter_batches,
    reconcile_in_batches,
)
from inventory_io.services.reconciler import HeaderFormatError, reconcile


def _rows(n: int) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for i in range(1, n + 1):
        if i % 3 == 0:
            rows.append({"name": f"Item {i}", "qty": "oops"})
        elif i % 4 == 0:
            rows.append({"name": f"Item {i}", "qty": i, "category": f"Missing {i % 8}"})
        else:
            rows.append({"name": f"Item {i}", "qty": i, "category": "Lighting"})
    return rows


def test_iter_batches():
    batches = list(iter_batches(list(range(7)), 3))
    assert [(o, list(b)) for o, b in batches] == [(0, [0, 1, 2]), (3, [3, 4, 5]), (6, [6])]


def test_iter_batches_rejects_zero():
    with pytest.raises(ValueError):
        list(iter_batches([1], 0))


@pytest.mark.parametrize("batch_size", [1, 2, 5, 100])
def test_batched_reconcile_matches_single_pass(catalog, batch_size: int):
    rows = _rows(20)
    assert reconcile_in_batches(rows, catalog, batch_size) == reconcile(rows, catalog)


def test_batched_reconcile_header_error(catalog):
    with pytest.raises(HeaderFormatError):
        reconcile_in_batches([], catalog, 10)


def test_import_file_csv_logs_rejected_rows(temp_workdir: Path, catalog):
    src = temp_workdir / "data" / "stock.csv"
    pd.DataFrame(_rows(6)).to_csv(src, index=False)
    cfg = replace(default_config(), batch_size=4, error_log_dir=str(temp_workdir / "logs"))
    buf = ErrorLogBuffer(cfg.error_log_dir)

    result = import_file(src, catalog, cfg, error_log=buf)

    assert result.total_rows == 6
    assert [i.row_index for i in result.invalid_items] == [3, 4, 6]
    assert result.missing_categories == ["Missing 4"]
    lines = buf.file_path.read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert [r["row"] for r in records] == [3, 4, 6]
    assert [r["error_type"] for r in records] == ["ROW_INVALID", "CATEGORY_NOT_FOUND", "ROW_INVALID"]
    assert all(r["file"] == "stock.csv" for r in records)


def test_import_file_rejects_large_file(temp_workdir: Path, catalog):
    src = temp_workdir / "data" / "stock.csv"
    pd.DataFrame(_rows(50)).to_csv(src, index=False)
    cfg = replace(default_config(), max_file_bytes=100, error_log_dir=str(temp_workdir / "logs"))
    buf = ErrorLogBuffer(cfg.error_log_dir)

    with pytest.raises(ProcessingError, match="limit is 100 bytes"):
        import_file(src, catalog, cfg, error_log=buf)
    record = json.loads(buf.file_path.read_text(encoding="utf-8").strip())
    assert record["row"] == -1
    assert record["error_type"] == "FILE_REJECTED"


def test_import_file_rejects_disallowed_type(temp_workdir: Path, catalog):
    src = temp_workdir / "data" / "stock.xls"
    src.write_bytes(b"")
    cfg = replace(default_config(), allowed_extensions=(".csv",), error_log_dir=str(temp_workdir / "logs"))
    with pytest.raises(ProcessingError, match="unsupported file type"):
        import_file(src, catalog, cfg)


def test_import_file_rejects_headerless_table(temp_workdir: Path, catalog):
    src = temp_workdir / "data" / "stock.csv"
    src.write_text("sku,qty\nA1,4\n", encoding="utf-8")
    cfg = replace(default_config(), error_log_dir=str(temp_workdir / "logs"))
    with pytest.raises(ProcessingError, match="no item name column"):
        import_file(src, catalog, cfg)


def test_import_file_all_valid_writes_no_log(temp_workdir: Path, catalog):
    src = temp_workdir / "data" / "stock.csv"
    src.write_text("Item,Qty,Category\nPens,5,Office Supplies\n", encoding="utf-8")
    cfg = replace(default_config(), error_log_dir=str(temp_workdir / "run_logs"))
    result = import_file(src, catalog, cfg)
    assert result.successful == 1
    assert not (temp_workdir / "run_logs").exists()
