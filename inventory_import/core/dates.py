from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta

from ..models.cells import Cell, CellKind

"""Bounded date coercion for expiry cells.

Accepted shapes:

- DATE cells: formatted from the value's own calendar fields.
- NUMBER cells: spreadsheet day-serials in the 1900 date system, including
  its fictitious 1900-02-29 (serial 60).
- TEXT cells: after dropping everything except digits and ``- / .``, three
  ``-``/``/`` separated tokens shaped DD/MM/YYYY or YYYY/MM/DD.

No calendar validation is done: "31-02-2025" becomes "2025-02-31".
"""

__all__ = [
    "coerce_date",
    "date_from_serial",
    "date_from_text",
]

# serial 1 == 1900-01-01
_SERIAL_EPOCH = date(1899, 12, 31)
_FAKE_LEAP_SERIAL = 60
_MAX_SERIAL = 2958465  # 9999-12-31

_STRIP_RE = re.compile(r"[^0-9/.\-]")
_SPLIT_RE = re.compile(r"[/\-]")
_DIGITS_RE = re.compile(r"[0-9]+")
_ISO_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _iso(year: str, month: str, day: str) -> str:
    return f"{year}-{month.rjust(2, '0')}-{day.rjust(2, '0')}"


def _native(value: date | datetime) -> str | None:
    # aware datetimes keep their own wall-clock date; no conversion to UTC
    if isinstance(value, datetime):
        value = value.date()
    iso = value.isoformat()
    # missing markers such as NaT format as "NaT"
    if not _ISO_RE.fullmatch(iso):
        return None
    return iso


def date_from_serial(serial: float) -> str | None:
    """Decode a 1900-system day-serial into YYYY-MM-DD.

    Fractions (time of day) are dropped. Returns None for non-finite,
    non-positive or out-of-range serials.
    """
    if not math.isfinite(serial) or serial < 1:
        return None
    days = int(serial)
    if days > _MAX_SERIAL:
        return None
    if days == _FAKE_LEAP_SERIAL:
        return "1900-02-29"
    if days > _FAKE_LEAP_SERIAL:
        days -= 1
    return (_SERIAL_EPOCH + timedelta(days=days)).isoformat()


def date_from_text(text: str) -> str | None:
    """Parse DD/MM/YYYY or YYYY/MM/DD (``-`` or ``/`` separated)."""
    cleaned = _STRIP_RE.sub("", text)
    tokens = _SPLIT_RE.split(cleaned)
    if len(tokens) != 3:
        return None
    if not all(_DIGITS_RE.fullmatch(t) for t in tokens):
        return None
    first, middle, last = tokens
    if len(last) == 4:
        day, month, year = first, middle, last
    elif len(first) == 4:
        year, month, day = first, middle, last
    else:
        return None
    if len(day) > 2 or len(month) > 2:
        return None
    return _iso(year, month, day)


def coerce_date(cell: Cell) -> str | None:
    """Convert an expiry cell into YYYY-MM-DD, or None when it is invalid."""
    if cell.kind is CellKind.DATE:
        return _native(cell.value)
    if cell.kind is CellKind.NUMBER:
        return date_from_serial(float(cell.value))
    if cell.kind is CellKind.TEXT:
        return date_from_text(cell.value)
    # EMPTY
    return None
