from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..services.export import DEFAULT_DATE_FORMAT, DEFAULT_EXPORT_FIELDS, EXPORT_FIELDS
from ..services.summary import DEFAULT_ERROR_DISPLAY_LIMIT

"""Config loader.

Responsibilities:
- Load YAML config (e.g. config/inventory.yml)
- Validate against the bundled config_schema.json
- Apply defaults for every omitted key
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

DEFAULT_MAX_FILE_BYTES = 5 * 1024 * 1024
DEFAULT_ALLOWED_EXTENSIONS = (".xlsx", ".xls", ".csv")
DEFAULT_BATCH_SIZE = 500


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ExportConfig:
    fields: tuple[str, ...] = tuple(f for f in EXPORT_FIELDS if f in DEFAULT_EXPORT_FIELDS)
    date_format: str = DEFAULT_DATE_FORMAT
    filename_prefix: str = "inventory_export"
    format: str = "xlsx"


@dataclass(frozen=True)
class InventoryIOConfig:
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    batch_size: int = DEFAULT_BATCH_SIZE
    error_display_limit: int = DEFAULT_ERROR_DISPLAY_LIMIT
    error_log_dir: str = "./logs"
    export: ExportConfig = field(default_factory=ExportConfig)


def default_config() -> InventoryIOConfig:
    return InventoryIOConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the data
            fails validation (wrong types, unknown keys, ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> InventoryIOConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = default_config()
    export_raw = data.get("export", {})
    export = ExportConfig(
        fields=tuple(export_raw.get("fields", defaults.export.fields)),
        date_format=export_raw.get("date_format", defaults.export.date_format),
        filename_prefix=export_raw.get("filename_prefix", defaults.export.filename_prefix),
        format=export_raw.get("format", defaults.export.format),
    )
    # 拡張子は小文字・ドット付きで比較する
    extensions = tuple(e.lower() for e in data.get("allowed_extensions", defaults.allowed_extensions))
    return InventoryIOConfig(
        max_file_bytes=data.get("max_file_bytes", defaults.max_file_bytes),
        allowed_extensions=extensions,
        batch_size=data.get("batch_size", defaults.batch_size),
        error_display_limit=data.get("error_display_limit", defaults.error_display_limit),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
        export=export,
    )
