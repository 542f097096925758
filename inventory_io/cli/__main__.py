from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from inventory_io.config.loader import ConfigError, InventoryIOConfig, default_config, load_config
from inventory_io.excel.writer import write_table
from inventory_io.logging.init import log_summary, set_debug, setup_logging
from inventory_io.models.category import catalog_from_records
from inventory_io.models.inventory_item import InventoryItem
from inventory_io.services.export import EXPORT_FIELDS, export_filename, serialize
from inventory_io.services.field_normalizer import CANONICAL_FIELDS
from inventory_io.services.importer import ProcessingError, import_file
from inventory_io.services.summary import (
    format_error_list,
    format_missing_categories,
    render_summary_line,
)
from inventory_io.services.template import generate_template

"""CLI entrypoint.

Subcommands:
- import FILE --categories CATALOG   reconcile a spreadsheet against a catalog
- export ITEMS --out-dir DIR          write selected fields of stored items
- template [--out PATH]               write the import template

Config path resolution: --config, then $INVENTORY_IO_CONFIG (a .env file in
the working directory is loaded first), then config/inventory.yml if present,
else built-in defaults.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

DEFAULT_CONFIG_PATH = Path("config/inventory.yml")
DEFAULT_TEMPLATE_PATH = Path("inventory_import_template.xlsx")


class InputFileError(Exception):
    """Raised when a catalog or items file cannot be loaded."""


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="inventory-io", description="Inventory spreadsheet import/export")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, help="Path to YAML config")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Validate a spreadsheet against the category catalog")
    imp.add_argument("file", type=Path)
    imp.add_argument("--categories", type=Path, required=True, help="YAML/JSON category catalog")
    imp.add_argument("--output", type=Path, help="Write importable items as JSON")

    exp = sub.add_parser("export", help="Export inventory items to a spreadsheet")
    exp.add_argument("items", type=Path, help="YAML/JSON list of inventory items")
    exp.add_argument("--out-dir", type=Path, default=Path("."))
    exp.add_argument("--fields", nargs="+", choices=EXPORT_FIELDS, help="Fields to export")
    exp.add_argument("--format", choices=("xlsx", "csv"))

    tpl = sub.add_parser("template", help="Write the import template")
    tpl.add_argument("--out", type=Path, default=DEFAULT_TEMPLATE_PATH)
    return p.parse_args(argv)


def _resolve_config(explicit: Path | None) -> InventoryIOConfig:
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv("INVENTORY_IO_CONFIG")
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _load_records(path: Path, key: str) -> list[dict[str, Any]]:
    """Load a list of records from YAML/JSON, either bare or under ``key``."""
    if not path.exists():
        raise InputFileError(f"file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InputFileError(f"invalid yaml/json in {path}: {e}") from e
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise InputFileError(f"{path}: expected a list of {key} records")
    return data


def _run_import(args: argparse.Namespace, cfg: InventoryIOConfig, logger) -> int:
    try:
        catalog = catalog_from_records(_load_records(args.categories, "categories"))
    except (InputFileError, ValueError) as e:
        logger.error(f"categories: {e}")
        return EXIT_FATAL
    logger.info(f"Importing {args.file} against {len(catalog)} categories")

    try:
        result = import_file(args.file, catalog, cfg)
    except ProcessingError as e:
        logger.error(f"import: {e}")
        return EXIT_FATAL

    logger.info(f"{result.successful} items ready to import")
    if result.failed:
        logger.warning(f"{result.failed} items failed to import")
        for line in format_error_list(result.errors, cfg.error_display_limit):
            logger.warning(line)
    guidance = format_missing_categories(result.missing_categories)
    if guidance:
        logger.warning(guidance)

    if args.output is not None:
        records = [item.to_record() for item in result.valid_items]
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"wrote {len(records)} items to {args.output}")

    log_summary(render_summary_line(args.file.name, result)[len("SUMMARY "):])
    return EXIT_PARTIAL_FAILURE if result.failed else EXIT_SUCCESS_ALL


def _run_export(args: argparse.Namespace, cfg: InventoryIOConfig, logger) -> int:
    try:
        items = [InventoryItem.from_dict(r) for r in _load_records(args.items, "items")]
    except (InputFileError, ValueError) as e:
        logger.error(f"items: {e}")
        return EXIT_FATAL
    if not items:
        logger.error("export: no inventory items available for export")
        return EXIT_FATAL

    fields = args.fields or cfg.export.fields
    rows = serialize(items, fields, date_format=cfg.export.date_format)
    columns = [f for f in EXPORT_FIELDS if f in set(fields)]
    fmt = args.format or cfg.export.format
    out = args.out_dir / export_filename(cfg.export.filename_prefix, date.today(), fmt)
    write_table(rows, out, columns=columns)
    logger.info(f"Exported {len(rows)} items with {len(columns)} fields to {out}")
    return EXIT_SUCCESS_ALL


def _run_template(args: argparse.Namespace, logger) -> int:
    try:
        write_table(generate_template(), args.out, columns=list(CANONICAL_FIELDS))
    except ValueError as e:
        logger.error(f"template: {e}")
        return EXIT_FATAL
    logger.info(f"Template written to {args.out}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([...]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_dotenv(dotenv_path=Path(".env"), override=False)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.command == "import":
        return _run_import(args, cfg, logger)
    if args.command == "export":
        return _run_export(args, cfg, logger)
    return _run_template(args, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
