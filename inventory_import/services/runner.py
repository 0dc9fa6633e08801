from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from ..core.engine import import_rows
from ..excel.reader import SourceReadError, read_table
from ..logging.error_log import SkipLogBuffer
from ..models.outcome import ImportErrorKind, ImportOutcome, ImportSuccess
from ..models.processing_result import FileStat, RunResult
from ..models.records import StagedRecord
from ..models.roles import AliasTable
from ..models.skip_record import SkipRecord
from .progress import ProgressTracker

"""Multi-file import runner used by the CLI.

Files are imported one after another. A file that cannot be read, or whose
import fails, is counted as failed and the run continues with the next one.
"""

__all__ = [
    "READ_ERROR_TYPE",
    "FileOutcome",
    "RunOutput",
    "run_files",
]

logger = logging.getLogger(__name__)

READ_ERROR_TYPE = "SOURCE_READ_ERROR"


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    outcome: ImportOutcome | None  # None when the file could not be read
    error: str | None = None


@dataclass
class RunOutput:
    result: RunResult
    files: list[FileOutcome] = field(default_factory=list)

    @property
    def records(self) -> list[StagedRecord]:
        out: list[StagedRecord] = []
        for f in self.files:
            if isinstance(f.outcome, ImportSuccess):
                out.extend(f.outcome.records)
        return out


def _log_outcome(path: Path, outcome: ImportOutcome, skip_log: SkipLogBuffer | None) -> None:
    for step in outcome.diagnostics.steps:
        logger.info(f"{path.name}: {step}")
    if skip_log is None:
        return
    if isinstance(outcome, ImportSuccess):
        for s in outcome.diagnostics.skipped_rows:
            skip_log.append(
                SkipRecord.create(path.name, s.row_number, ImportErrorKind.INVALID_ROW_DATE.value, s.reason)
            )
    else:
        skip_log.append(SkipRecord.create(path.name, -1, outcome.kind.value, outcome.message))


def run_files(
    paths: Sequence[Path],
    alias_table: AliasTable,
    *,
    skip_log: SkipLogBuffer | None = None,
    sheet: str | int = 0,
    keep_na_strings: list[str] | None = None,
) -> RunOutput:
    """Import each file and aggregate the results."""
    start_time = datetime.now(UTC)
    files: list[FileOutcome] = []
    stats: list[FileStat] = []

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            t0 = time.perf_counter()
            try:
                table = read_table(path, sheet=sheet, keep_na_strings=keep_na_strings)
            except SourceReadError as e:
                logger.error(f"{path.name}: {e}")
                if skip_log is not None:
                    skip_log.append(SkipRecord.create(path.name, -1, READ_ERROR_TYPE, str(e)))
                files.append(FileOutcome(path=path, outcome=None, error=str(e)))
                stats.append(FileStat(path.name, "failed", 0, 0, 0, time.perf_counter() - t0, str(e)))
                progress.finish_file()
                continue

            outcome = import_rows(table.rows, source=table.label, alias_table=alias_table)
            _log_outcome(path, outcome, skip_log)
            diag = outcome.diagnostics
            elapsed = time.perf_counter() - t0
            if isinstance(outcome, ImportSuccess):
                stats.append(
                    FileStat(
                        file_name=path.name,
                        status="success",
                        imported_rows=diag.success_count,
                        skipped_rows=len(diag.skipped_rows),
                        ignored_rows=diag.ignored_count,
                        elapsed_seconds=elapsed,
                    )
                )
                files.append(FileOutcome(path=path, outcome=outcome))
            else:
                stats.append(FileStat(path.name, "failed", 0, 0, 0, elapsed, outcome.message))
                files.append(FileOutcome(path=path, outcome=outcome, error=outcome.message))
            progress.finish_file(rows=diag.success_count)

            if skip_log is not None:
                skip_log.flush()

    if skip_log is not None:
        skip_log.flush()

    end_time = datetime.now(UTC)
    success = [s for s in stats if s.status == "success"]
    result = RunResult(
        success_files=len(success),
        failed_files=len(stats) - len(success),
        total_imported_rows=sum(s.imported_rows for s in success),
        total_skipped_rows=sum(s.skipped_rows for s in success),
        total_ignored_rows=sum(s.ignored_rows for s in success),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=stats,
    )
    return RunOutput(result=result, files=files)
