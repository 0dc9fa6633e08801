# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from inventory_import.models.cells import Cell, to_raw_row


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("INVENTORY_IMPORT_ALIASES", raising=False)
        yield p


@pytest.fixture()
def sample_aliases_yaml() -> str:
    return """aliases:
  name: [artigo, produto]
  expiry: [caducidade, validade]
  category: [familia]
  quantity: [unidades]
"""


@pytest.fixture()
def write_aliases(temp_workdir: Path, sample_aliases_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "aliases.yml"
    cfg.write_text(sample_aliases_yaml, encoding="utf-8")
    return cfg


def make_rows(headers: list[str], *rows: list[Any]) -> list[dict[str, Cell]]:
    """Build RawRows from a header list and positional values."""
    return [to_raw_row(dict(zip(headers, r, strict=True))) for r in rows]


@pytest.fixture()
def rows() -> Callable[..., list[dict[str, Cell]]]:
    return make_rows


def write_excel(path: Path, rows: list[list[object]], sheet: str = "Planilha1") -> Path:
    """Write rows (first one is the header) to an .xlsx file."""
    df = pd.DataFrame(rows[1:], columns=rows[0])
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet, index=False)
    return path


@pytest.fixture()
def excel_file() -> Callable[..., Path]:
    return write_excel
