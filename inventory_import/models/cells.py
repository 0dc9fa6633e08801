from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd

"""Raw cell variant consumed by the import engine.

The source reader decides once, at the boundary, what kind of value each cell
holds. Everything downstream (date coercion, quantity parsing, diagnostics)
dispatches on ``Cell.kind`` instead of probing Python types again.
"""

__all__ = [
    "CellKind",
    "Cell",
    "EMPTY",
    "to_cell",
    "to_raw_row",
]


class CellKind(Enum):
    """Kind of value observed in a spreadsheet cell."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    """A single raw cell value tagged with its kind.

    value is a ``str`` for TEXT, ``int | float`` for NUMBER,
    ``date | datetime`` for DATE and ``None`` for EMPTY.
    """
    kind: CellKind
    value: Any = None

    @staticmethod
    def text(value: str) -> Cell:
        return Cell(CellKind.TEXT, value)

    @staticmethod
    def number(value: int | float) -> Cell:
        return Cell(CellKind.NUMBER, value)

    @staticmethod
    def date(value: date | datetime) -> Cell:
        return Cell(CellKind.DATE, value)

    @staticmethod
    def empty() -> Cell:
        return EMPTY

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def display(self) -> str:
        """Render the cell as user-facing text."""
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.TEXT:
            return self.value
        if self.kind is CellKind.NUMBER:
            v = self.value
            if isinstance(v, float) and math.isfinite(v) and v == int(v):
                return str(int(v))
            return str(v)
        # DATE
        if isinstance(self.value, datetime):
            if self.value.time() == datetime.min.time() and self.value.tzinfo is None:
                return self.value.date().isoformat()
            return self.value.isoformat()
        return self.value.isoformat()


EMPTY = Cell(CellKind.EMPTY, None)


def to_cell(value: Any) -> Cell:
    """Classify a plain Python value into a Cell.

    Only the reader boundary and test helpers call this. ``None``, float
    NaN and the pandas missing markers (``NA``, ``NaT``) map to EMPTY.
    Booleans are kept as text so they never read as day serials.
    """
    # NaT subclasses datetime, check it before the date branch
    if value is None or value is pd.NA or value is pd.NaT:
        return EMPTY
    if isinstance(value, Cell):
        return value
    if isinstance(value, str):
        return Cell.text(value)
    if isinstance(value, (bool, np.bool_)):
        return Cell.text(str(bool(value)))
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return EMPTY
        return Cell.date(pd.Timestamp(value).to_pydatetime())
    if isinstance(value, pd.Timestamp):
        return Cell.date(value.to_pydatetime())
    # datetime is a subclass of date, both land in DATE
    if isinstance(value, date):
        return Cell.date(value)
    if isinstance(value, numbers.Integral):
        return Cell.number(int(value))
    if isinstance(value, numbers.Real):
        f = float(value)
        if math.isnan(f):
            return EMPTY
        return Cell.number(f)
    return Cell.text(str(value))


def to_raw_row(values: Mapping[str, Any]) -> dict[str, Cell]:
    """Convert a header -> plain value mapping into a RawRow of cells."""
    return {str(k): to_cell(v) for k, v in values.items()}
