"""Domain models for the inventory spreadsheet importer.

Raw cell variant, role/alias configuration, staged records, diagnostics and
the structured import outcome.
"""

from .cells import EMPTY, Cell, CellKind, to_cell, to_raw_row
from .diagnostics import RAW_PREVIEW_LIMIT, DiagnosticsCollector, ImportDiagnostics
from .outcome import ImportErrorKind, ImportFailure, ImportOutcome, ImportSuccess
from .records import DEFAULT_CATEGORY, DEFAULT_QUANTITY, SkippedRow, StagedRecord
from .roles import AliasTable, ColumnMap, FieldRole, default_alias_table

__all__ = [
    # Raw cells
    "Cell",
    "CellKind",
    "EMPTY",
    "to_cell",
    "to_raw_row",
    # Configuration
    "AliasTable",
    "ColumnMap",
    "FieldRole",
    "default_alias_table",
    # Records
    "DEFAULT_CATEGORY",
    "DEFAULT_QUANTITY",
    "SkippedRow",
    "StagedRecord",
    # Diagnostics / outcome
    "RAW_PREVIEW_LIMIT",
    "DiagnosticsCollector",
    "ImportDiagnostics",
    "ImportErrorKind",
    "ImportFailure",
    "ImportOutcome",
    "ImportSuccess",
]
