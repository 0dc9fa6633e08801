from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering for the CLI."""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small values
        return f"{value:.6f}".rstrip('0').rstrip('.')
    return str(value)


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a run.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} rows={rows}
    skipped_rows={skipped} ignored_rows={ignored} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     success_files=1, failed_files=0, total_imported_rows=10,
        ...     total_skipped_rows=2, total_ignored_rows=1,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 success=1 failed=0 rows=10 skipped_rows=2 ignored_rows=1 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_imported_rows} "
        f"skipped_rows={result.total_skipped_rows} "
        f"ignored_rows={result.total_ignored_rows} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )
