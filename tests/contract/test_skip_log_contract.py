from __future__ import annotations

import json
import re

from inventory_import.models.outcome import ImportErrorKind
from inventory_import.models.skip_record import SkipRecord

"""Skip log JSON Lines contract: fixed keys and value shapes."""

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")


def test_skip_record_contract_keys_and_types():
    line = SkipRecord.create("estoque.xlsx", 7, ImportErrorKind.INVALID_ROW_DATE.value, "Data inválida: x").to_json_line()
    data = json.loads(line)
    assert list(data.keys()) == ["timestamp", "file", "row", "error_type", "message"]
    assert TIMESTAMP_RE.match(data["timestamp"])
    assert isinstance(data["row"], int)
    assert re.fullmatch(r"[A-Z_]+", data["error_type"])


def test_error_kinds_are_upper_snake_and_fatality():
    for kind in ImportErrorKind:
        assert kind.value == kind.name
    assert {k for k in ImportErrorKind if k.fatal} == {
        ImportErrorKind.EMPTY_SOURCE,
        ImportErrorKind.MISSING_REQUIRED_COLUMNS,
    }
