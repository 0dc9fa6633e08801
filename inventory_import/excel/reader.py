from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.engine import SourceLabel
from ..models.cells import EMPTY, Cell, to_cell

"""Source reader adapter.

Decoding is delegated to pandas (openpyxl for .xlsx, the python CSV engine
with delimiter sniffing for .csv/.txt). This module only turns the decoded
frame into RawRows of Cells:

- first row is the header row, data starts on spreadsheet row 2
- fully empty rows are dropped
- NaN/NaT and whitespace-only text become EMPTY cells
"""

__all__ = [
    "SourceReadError",
    "SourceTable",
    "EXCEL_SUFFIXES",
    "TEXT_SUFFIXES",
    "read_table",
    "frame_to_rows",
]

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
TEXT_SUFFIXES = {".csv", ".txt"}
_TEXT_ENCODINGS = ("utf-8-sig", "latin-1")


class SourceReadError(Exception):
    """Raised when a file cannot be decoded into a table."""


@dataclass
class SourceTable:
    label: SourceLabel
    columns: list[str]
    rows: list[dict[str, Cell]]


def _na_options(keep_na_strings: list[str] | None) -> dict[str, Any]:
    """Pandas NA handling that leaves keep_na_strings as text."""
    if not keep_na_strings:
        return {"keep_default_na": True, "na_values": None}
    import pandas._libs.parsers as parsers

    custom_na = parsers.STR_NA_VALUES - set(keep_na_strings)
    return {"keep_default_na": False, "na_values": list(custom_na)}


def _clean(value: Any) -> Cell:
    if isinstance(value, str) and value.strip() == "":
        return EMPTY
    return to_cell(value)


def frame_to_rows(df: pd.DataFrame) -> tuple[list[str], list[dict[str, Cell]]]:
    """Convert a header-applied DataFrame into (columns, rows)."""
    columns = [str(c).strip() for c in df.columns.tolist()]
    rows: list[dict[str, Cell]] = []
    for raw in df.itertuples(index=False, name=None):
        row = {col: _clean(val) for col, val in zip(columns, raw, strict=False)}
        if all(c.is_empty for c in row.values()):
            continue
        rows.append(row)
    return columns, rows


def _read_csv(path: Path, encoding: str, na: dict[str, Any]) -> pd.DataFrame:
    try:
        return pd.read_csv(path, sep=None, engine="python", dtype=str, encoding=encoding, **na)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()


def _read_frame(path: Path, sheet: str | int, keep_na_strings: list[str] | None) -> pd.DataFrame:
    suffix = path.suffix.lower()
    na = _na_options(keep_na_strings)
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=sheet, header=0, dtype=object, **na)
    if suffix in TEXT_SUFFIXES:
        if path.stat().st_size == 0:
            return pd.DataFrame()
        # latin-1 decodes any byte sequence
        for encoding in _TEXT_ENCODINGS[:-1]:
            try:
                return _read_csv(path, encoding, na)
            except UnicodeDecodeError:
                logger.debug(f"{path.name}: not {encoding}, retrying")
        return _read_csv(path, _TEXT_ENCODINGS[-1], na)
    raise SourceReadError(f"unsupported file type: {path.name}")


def read_table(
    path: Path, *, sheet: str | int = 0, keep_na_strings: list[str] | None = None
) -> SourceTable:
    """Read the first (or named) sheet of a spreadsheet export.

    Raises:
        SourceReadError: file missing, unsupported or undecodable
    """
    if not path.exists():
        raise SourceReadError(f"file not found: {path}")
    try:
        df = _read_frame(path, sheet, keep_na_strings)
    except SourceReadError:
        raise
    except Exception as e:
        raise SourceReadError(f"could not read {path.name}: {e}") from e
    columns, rows = frame_to_rows(df)
    label = SourceLabel(name=path.name, size_bytes=path.stat().st_size)
    return SourceTable(label=label, columns=columns, rows=rows)
