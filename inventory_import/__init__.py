"""Tolerant spreadsheet importer for inventory records.

Resolves arbitrary headers to inventory fields, coerces expiry dates of
unknown shape and returns staged records together with a diagnostics trace.
"""

from .core.engine import SourceLabel, import_rows
from .models import (
    AliasTable,
    Cell,
    CellKind,
    FieldRole,
    ImportDiagnostics,
    ImportErrorKind,
    ImportFailure,
    ImportOutcome,
    ImportSuccess,
    SkippedRow,
    StagedRecord,
    default_alias_table,
    to_cell,
    to_raw_row,
)

__version__ = "0.1.0"

__all__ = [
    "AliasTable",
    "Cell",
    "CellKind",
    "FieldRole",
    "ImportDiagnostics",
    "ImportErrorKind",
    "ImportFailure",
    "ImportOutcome",
    "ImportSuccess",
    "SkippedRow",
    "SourceLabel",
    "StagedRecord",
    "default_alias_table",
    "import_rows",
    "to_cell",
    "to_raw_row",
]
