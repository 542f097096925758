# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from inventory_io.logging.init import reset_logging
from inventory_io.models.category import Category


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("INVENTORY_IO_CONFIG", raising=False)
        yield p


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """max_file_bytes: 5242880
allowed_extensions: [.xlsx, .csv]
batch_size: 2
error_display_limit: 10
error_log_dir: ./logs
export:
  fields: [name, quantity, category, status]
  date_format: "%Y-%m-%d"
  filename_prefix: inventory_export
  format: csv
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "inventory.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def catalog() -> list[Category]:
    return [
        Category(id="c1", name="Office Supplies", color="blue"),
        Category(id="c2", name="Lighting", color="yellow", icon="bulb"),
        Category(id="c3", name="Cleaning Supplies", color="green"),
        Category(id="c4", name="General", color="gray"),
    ]


@pytest.fixture()
def catalog_yaml(temp_workdir: Path) -> Path:
    p = temp_workdir / "data" / "categories.yml"
    p.write_text(
        """categories:
  - {id: c1, name: Office Supplies, color: blue}
  - {id: c2, name: Lighting, color: yellow, icon: bulb}
  - {id: c3, name: Cleaning Supplies, color: green}
  - {id: c4, name: General, color: gray}
""",
        encoding="utf-8",
    )
    return p
