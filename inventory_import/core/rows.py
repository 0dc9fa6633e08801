from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ..models.cells import EMPTY, Cell, CellKind
from ..models.records import DEFAULT_CATEGORY, DEFAULT_QUANTITY, SkippedRow, StagedRecord
from ..models.roles import ColumnMap, FieldRole
from .dates import coerce_date

"""Per-row extraction and classification."""

__all__ = [
    "HEADER_ROW_OFFSET",
    "RowStatus",
    "RowResult",
    "parse_quantity",
    "process_row",
]

# logical index 0 sits on spreadsheet row 2 (row 1 is the header)
HEADER_ROW_OFFSET = 2

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


class RowStatus(Enum):
    ACCEPTED = "accepted"
    SKIPPED = "skipped"
    IGNORED = "ignored"


@dataclass(frozen=True)
class RowResult:
    status: RowStatus
    record: StagedRecord | None = None
    skipped: SkippedRow | None = None


def _cell(row: Mapping[str, Cell], column_map: ColumnMap, role: FieldRole) -> Cell:
    header = column_map.get(role)
    if header is None:
        return EMPTY
    return row.get(header, EMPTY)


def _text(cell: Cell) -> str:
    return cell.display().strip()


def parse_quantity(cell: Cell) -> int:
    """Leading integer of the cell, or DEFAULT_QUANTITY when absent/unusable.

    Non-positive results also fall back to the default.
    """
    qty: int | None = None
    if cell.kind is CellKind.NUMBER:
        v = float(cell.value)
        if math.isfinite(v):
            qty = int(v)
    elif cell.kind is CellKind.TEXT:
        m = _LEADING_INT_RE.match(cell.value)
        if m:
            qty = int(m.group(1))
    if qty is None or qty < 1:
        return DEFAULT_QUANTITY
    return qty


def process_row(row: Mapping[str, Cell], column_map: ColumnMap, row_index: int) -> RowResult:
    """Classify one raw row as accepted, skipped or ignored.

    row_index is the 0-based position among the data rows.
    """
    name = _text(_cell(row, column_map, FieldRole.NAME))
    if not name:
        # blank/footer noise, not reported to the user
        return RowResult(RowStatus.IGNORED)

    expiry_cell = _cell(row, column_map, FieldRole.EXPIRY)
    expiry = coerce_date(expiry_cell)
    if expiry is None:
        raw = expiry_cell.display() if not expiry_cell.is_empty else "(vazia)"
        return RowResult(
            RowStatus.SKIPPED,
            skipped=SkippedRow(
                row_number=row_index + HEADER_ROW_OFFSET,
                reason=f"Data inválida: {raw}",
            ),
        )

    category = _text(_cell(row, column_map, FieldRole.CATEGORY)) or DEFAULT_CATEGORY
    record = StagedRecord(
        name=name,
        expiry_date=expiry,
        category=category,
        quantity=parse_quantity(_cell(row, column_map, FieldRole.QUANTITY)),
        location=_text(_cell(row, column_map, FieldRole.LOCATION)),
        barcode=_text(_cell(row, column_map, FieldRole.BARCODE)),
    )
    return RowResult(RowStatus.ACCEPTED, record=record)
