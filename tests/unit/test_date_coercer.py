from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import numpy as np
import pandas as pd
import pytest

from inventory_import.core.dates import coerce_date, date_from_serial, date_from_text
from inventory_import.models.cells import Cell, to_cell


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("31/12/2025", "2025-12-31"),
        ("1/2/2025", "2025-02-01"),
        ("31-02-2025", "2025-02-31"),  # no calendar check
        ("2025-12-31", "2025-12-31"),
        ("2025/1/5", "2025-01-05"),
        ("Vence em 05/06/2026", "2026-06-05"),
    ],
)
def test_text_dates(text, expected):
    assert coerce_date(Cell.text(text)) == expected


def test_canonical_input_is_idempotent():
    once = coerce_date(Cell.text("2025-12-31"))
    assert once == "2025-12-31"
    assert coerce_date(Cell.text(once)) == once


@pytest.mark.parametrize(
    "text",
    [
        "abc",
        "",
        "31/12/25",  # no 4-digit token
        "31.12.2025",  # dots are kept but do not split
        "2025-12",
        "1/2/3/2025",
        "31//2025",
        "2025-123-01",
        "131/12/2025",
    ],
)
def test_invalid_text_dates(text):
    assert date_from_text(text) is None


def test_native_date_uses_own_calendar_fields():
    assert coerce_date(Cell.date(date(2025, 12, 31))) == "2025-12-31"
    assert coerce_date(Cell.date(datetime(2025, 12, 31, 23, 59))) == "2025-12-31"


def test_native_aware_datetime_keeps_local_day():
    brt = timezone(timedelta(hours=-3))
    value = datetime(2025, 12, 31, 0, 0, tzinfo=brt)
    assert coerce_date(Cell.date(value)) == "2025-12-31"


def test_native_missing_marker_is_invalid():
    assert coerce_date(Cell.date(pd.NaT)) is None


def test_numpy_datetime_with_time_of_day():
    assert coerce_date(to_cell(np.datetime64("2025-12-31T14:30"))) == "2025-12-31"


@pytest.mark.parametrize(
    ("serial", "expected"),
    [
        (1, "1900-01-01"),
        (59, "1900-02-28"),
        (60, "1900-02-29"),
        (61, "1900-03-01"),
        (45658, "2025-01-01"),
        (46022, "2025-12-31"),
        (46022.75, "2025-12-31"),
    ],
)
def test_day_serials(serial, expected):
    assert date_from_serial(serial) == expected


@pytest.mark.parametrize("serial", [0, -5, float("nan"), float("inf"), 10_000_000])
def test_invalid_day_serials(serial):
    assert date_from_serial(serial) is None


def test_serial_and_native_agree():
    native = coerce_date(Cell.date(date(2026, 3, 15)))
    serial = coerce_date(Cell.number(46096))
    assert native == serial == "2026-03-15"


def test_empty_cell_is_invalid():
    assert coerce_date(Cell.empty()) is None
