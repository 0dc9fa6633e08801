from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .cells import Cell
from .records import SkippedRow

"""Import diagnostics: the trace shown to the user on success and failure.

DiagnosticsCollector is the append-only accumulator owned by a running
import; ImportDiagnostics is the frozen snapshot handed back to callers.
"""

__all__ = [
    "RAW_PREVIEW_LIMIT",
    "ImportDiagnostics",
    "DiagnosticsCollector",
]

RAW_PREVIEW_LIMIT = 2


@dataclass(frozen=True)
class ImportDiagnostics:
    total_rows_found: int
    success_count: int
    ignored_count: int
    skipped_rows: tuple[SkippedRow, ...]
    columns_found: tuple[str, ...]
    steps: tuple[str, ...]
    raw_preview: tuple[Mapping[str, Cell], ...]

    def to_dict(self) -> dict[str, object]:
        """Plain JSON-compatible view (cells rendered via Cell.display)."""
        return {
            "totalRowsFound": self.total_rows_found,
            "successCount": self.success_count,
            "ignoredCount": self.ignored_count,
            "skippedRows": [{"row": s.row_number, "reason": s.reason} for s in self.skipped_rows],
            "columnsFound": list(self.columns_found),
            "steps": list(self.steps),
            "rawPreview": [{k: c.display() for k, c in row.items()} for row in self.raw_preview],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass
class DiagnosticsCollector:
    """Mutable accumulator populated over one import run."""
    total_rows_found: int = 0
    success_count: int = 0
    ignored_count: int = 0
    skipped_rows: list[SkippedRow] = field(default_factory=list)
    columns_found: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)
    raw_preview: list[Mapping[str, Cell]] = field(default_factory=list)

    def step(self, message: str) -> None:
        self.steps.append(message)

    def set_columns(self, headers: Sequence[str]) -> None:
        self.columns_found = list(headers)

    def set_preview(self, rows: Sequence[Mapping[str, Cell]]) -> None:
        self.raw_preview = [dict(r) for r in rows[:RAW_PREVIEW_LIMIT]]

    def snapshot(self) -> ImportDiagnostics:
        return ImportDiagnostics(
            total_rows_found=self.total_rows_found,
            success_count=self.success_count,
            ignored_count=self.ignored_count,
            skipped_rows=tuple(self.skipped_rows),
            columns_found=tuple(self.columns_found),
            steps=tuple(self.steps),
            raw_preview=tuple(self.raw_preview),
        )
