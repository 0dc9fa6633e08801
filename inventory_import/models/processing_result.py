from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Aggregated results for a multi-file CLI run."""

__all__ = [
    "FileStat",
    "RunResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # success/failed
    imported_rows: int
    skipped_rows: int
    ignored_rows: int
    elapsed_seconds: float
    error: str | None = None  # failure message when status == failed


@dataclass(frozen=True)
class RunResult:
    """Results and summary metrics for one CLI invocation."""
    success_files: int
    failed_files: int
    total_imported_rows: int
    total_skipped_rows: int
    total_ignored_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
