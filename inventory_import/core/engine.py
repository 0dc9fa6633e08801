from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from ..models.cells import Cell
from ..models.diagnostics import DiagnosticsCollector
from ..models.outcome import ImportErrorKind, ImportFailure, ImportOutcome, ImportSuccess
from ..models.records import StagedRecord
from ..models.roles import AliasTable, default_alias_table
from .aliases import MissingRequiredColumns, resolve_columns
from .rows import process_row

"""Import engine: table in, staged records and diagnostics out.

Flow: record the source label, count and preview the rows, resolve columns
from the first populated row, then classify every row. Fatal conditions
(empty table, unresolved required columns) end the run with an
ImportFailure carrying the diagnostics gathered so far. Nothing is raised
to the caller.
"""

__all__ = [
    "SourceLabel",
    "import_rows",
    "EMPTY_SOURCE_MESSAGE",
]

logger = logging.getLogger(__name__)

EMPTY_SOURCE_MESSAGE = "A planilha está vazia ou o formato não é suportado."


@dataclass(frozen=True)
class SourceLabel:
    """Human-readable source description, used only in the step log."""
    name: str
    size_bytes: int | None = None

    def describe(self) -> str:
        if self.size_bytes is None:
            return self.name
        return f"{self.name} ({self.size_bytes} bytes)"


def _first_headers(rows: Sequence[Mapping[str, Cell]]) -> list[str]:
    for row in rows:
        if row:
            return list(row.keys())
    return []


def _fail(diag: DiagnosticsCollector, kind: ImportErrorKind, message: str) -> ImportFailure:
    diag.step(f"FALHA CRÍTICA: {message}")
    logger.error(f"import failed ({kind.value}): {message}")
    return ImportFailure(kind=kind, message=message, diagnostics=diag.snapshot())


def import_rows(
    rows: Iterable[Mapping[str, Cell]],
    *,
    source: SourceLabel | None = None,
    alias_table: AliasTable | None = None,
) -> ImportOutcome:
    """Run header resolution and row normalization over a decoded table.

    Args:
        rows: RawRows (header -> Cell) in source order, header row excluded
        source: label for the step log
        alias_table: synonyms per role; the built-in table when None

    Returns:
        ImportSuccess with the accepted records, or ImportFailure. Both carry
        the diagnostics.
    """
    if alias_table is None:
        alias_table = default_alias_table()
    diag = DiagnosticsCollector()
    label = source.describe() if source is not None else "tabela em memória"
    diag.step(f"Lendo arquivo: {label}")
    logger.debug(f"import start: {label}")

    table = list(rows)
    diag.total_rows_found = len(table)
    diag.set_preview(table)
    if not table:
        return _fail(diag, ImportErrorKind.EMPTY_SOURCE, EMPTY_SOURCE_MESSAGE)
    diag.step(f"{len(table)} linhas encontradas.")

    headers = _first_headers(table)
    diag.set_columns(headers)
    try:
        column_map = resolve_columns(headers, alias_table)
    except MissingRequiredColumns as e:
        return _fail(diag, ImportErrorKind.MISSING_REQUIRED_COLUMNS, str(e))
    diag.step(f"Colunas identificadas: {column_map.describe()}")

    records: list[StagedRecord] = []
    for index, row in enumerate(table):
        result = process_row(row, column_map, index)
        if result.record is not None:
            records.append(result.record)
            diag.success_count += 1
        elif result.skipped is not None:
            diag.skipped_rows.append(result.skipped)
            logger.warning(f"row {result.skipped.row_number} skipped: {result.skipped.reason}")
        else:
            diag.ignored_count += 1

    diag.step(
        f"Processamento concluído: {diag.success_count} importados, "
        f"{len(diag.skipped_rows)} com data inválida, {diag.ignored_count} ignorados."
    )
    diag.step("Importação concluída.")
    logger.info(
        f"imported {label}: rows={diag.total_rows_found} accepted={diag.success_count} "
        f"skipped={len(diag.skipped_rows)} ignored={diag.ignored_count}"
    )
    return ImportSuccess(records=tuple(records), diagnostics=diag.snapshot())
