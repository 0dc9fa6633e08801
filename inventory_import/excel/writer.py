from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..models.records import StagedRecord

"""Spreadsheet export of staged records and the blank import template."""

__all__ = [
    "EXPORT_COLUMNS",
    "export_records",
    "format_display_date",
    "write_template",
]

EXPORT_COLUMNS = ["Produto", "Validade", "Categoria", "Quantidade", "Local", "Código de barras"]
EXPORT_SHEET = "Estoque"
TEMPLATE_SHEET = "Modelo"


def format_display_date(iso_date: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY ("" stays "")."""
    if not iso_date:
        return ""
    year, month, day = iso_date.split("-")
    return f"{day}/{month}/{year}"


def export_records(records: Iterable[StagedRecord], path: Path) -> Path:
    """Write records to an .xlsx backup that re-imports cleanly."""
    data = [
        {
            "Produto": r.name,
            "Validade": format_display_date(r.expiry_date),
            "Categoria": r.category,
            "Quantidade": r.quantity,
            "Local": r.location,
            "Código de barras": r.barcode,
        }
        for r in records
    ]
    df = pd.DataFrame(data, columns=EXPORT_COLUMNS)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=EXPORT_SHEET, index=False)
    return path


def write_template(path: Path) -> Path:
    """Write a one-row example sheet showing the expected layout."""
    df = pd.DataFrame(
        [{"Produto": "Item Exemplo", "Validade": "31/12/2025", "Categoria": "Alimentos", "Quantidade": 1}]
    )
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=TEMPLATE_SHEET, index=False)
    return path
