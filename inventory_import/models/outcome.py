from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .diagnostics import ImportDiagnostics
from .records import StagedRecord

"""Structured result of an import: success or failure, both with diagnostics."""

__all__ = [
    "ImportErrorKind",
    "ImportSuccess",
    "ImportFailure",
    "ImportOutcome",
]


class ImportErrorKind(Enum):
    """Error classification (UPPER_SNAKE values, used in the skip log too).

    EMPTY_SOURCE and MISSING_REQUIRED_COLUMNS are fatal. INVALID_ROW_DATE
    skips a row and BLANK_NAME silently ignores it.
    """
    EMPTY_SOURCE = "EMPTY_SOURCE"
    MISSING_REQUIRED_COLUMNS = "MISSING_REQUIRED_COLUMNS"
    INVALID_ROW_DATE = "INVALID_ROW_DATE"
    BLANK_NAME = "BLANK_NAME"

    @property
    def fatal(self) -> bool:
        return self in (ImportErrorKind.EMPTY_SOURCE, ImportErrorKind.MISSING_REQUIRED_COLUMNS)


@dataclass(frozen=True)
class ImportSuccess:
    records: tuple[StagedRecord, ...]
    diagnostics: ImportDiagnostics

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ImportFailure:
    kind: ImportErrorKind
    message: str  # user-facing prose
    diagnostics: ImportDiagnostics

    @property
    def ok(self) -> bool:
        return False


ImportOutcome = ImportSuccess | ImportFailure
