from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, resolve_alias_table
from ..core.aliases import resolve_columns
from ..core.expiry import inventory_stats
from ..excel.reader import SourceReadError, read_table
from ..excel.writer import export_records, write_template
from ..logging.error_log import SkipLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.outcome import ImportSuccess
from ..models.roles import AliasTable
from ..services.runner import RunOutput, run_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Imports one or more spreadsheet exports, logs each file's diagnostic steps,
writes skipped rows to ``logs/skipped-*.log`` and prints a SUMMARY line.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path) -> None:
    """Load .env (INVENTORY_IMPORT_ALIASES etc.) without overriding the environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _sheet_arg(value: str) -> str | int:
    return int(value) if value.isdigit() else value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Tolerant spreadsheet -> inventory importer")
    p.add_argument("files", nargs="*", type=Path, help="Spreadsheet exports (.xlsx, .xls, .csv)")
    p.add_argument("--aliases", type=Path, default=None, help="YAML alias table")
    p.add_argument("--sheet", type=_sheet_arg, default=0, help="Sheet name or 0-based index (default: first sheet)")
    p.add_argument("--keep-na", action="append", default=None, metavar="TEXT", help="Keep TEXT as a value instead of a missing cell (repeatable, e.g. NA)")
    p.add_argument("--export", type=Path, default=None, help="Write imported records to this .xlsx")
    p.add_argument("--template", type=Path, default=None, help="Write an example import sheet")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, resolved columns & first rows then exit")
    p.add_argument("--json", action="store_true", help="Print records and diagnostics as JSON lines; log lines move to stderr")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(files: list[Path], alias_table: AliasTable, sheet: str | int = 0) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        try:
            table = read_table(f, sheet=sheet)
        except SourceReadError as e:
            print(f"  read_error: {e}")
            continue
        column_map = resolve_columns(table.columns, alias_table, strict=False)
        print(f"  cols={table.columns}")
        print(f"  resolved={column_map.describe() or '-'}")
        sample = [{k: c.display() for k, c in r.items()} for r in table.rows[:3]]
        print("    sample_rows=", sample)
    return EXIT_SUCCESS_ALL


def _print_json(output: RunOutput) -> None:
    for f in output.files:
        if f.outcome is None:
            payload = {"file": f.path.name, "ok": False, "message": f.error}
        elif isinstance(f.outcome, ImportSuccess):
            payload = {
                "file": f.path.name,
                "ok": True,
                "records": [r.to_dict() for r in f.outcome.records],
                "diagnostics": f.outcome.diagnostics.to_dict(),
            }
        else:
            payload = {
                "file": f.path.name,
                "ok": False,
                "kind": f.outcome.kind.value,
                "message": f.outcome.message,
                "diagnostics": f.outcome.diagnostics.to_dict(),
            }
        print(json.dumps(payload, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    # [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    # stdout carries only JSON payloads in --json mode
    logger = setup_logging(sys.stderr if args.json else None)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.template is not None:
        write_template(args.template)
        logger.info(f"template written: {args.template}")
        if not args.files:
            return EXIT_SUCCESS_ALL

    if not args.files:
        logger.error("no input files")
        return EXIT_FATAL

    try:
        alias_table = resolve_alias_table(args.aliases)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.files, alias_table, args.sheet)

    skip_log = SkipLogBuffer()
    output = run_files(
        args.files,
        alias_table,
        skip_log=skip_log,
        sheet=args.sheet,
        keep_na_strings=args.keep_na,
    )
    result = output.result

    if args.json:
        _print_json(output)

    records = output.records
    if args.export is not None:
        export_records(records, args.export)
        logger.info(f"exported {len(records)} records to {args.export}")

    stats = inventory_stats(records, date.today())
    logger.info(
        f"expiry total={stats.total} expired={stats.expired} "
        f"expiring_soon={stats.expiring_soon} safe={stats.safe} undated={stats.undated}"
    )
    if result.total_skipped_rows or result.failed_files:
        logger.info(f"skip log: {skip_log.file_path}")

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
