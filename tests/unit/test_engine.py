from __future__ import annotations

from datetime import date

import pandas as pd
import pytest
from conftest import make_rows

from inventory_import.core.engine import EMPTY_SOURCE_MESSAGE, SourceLabel, import_rows
from inventory_import.models.cells import Cell, to_raw_row
from inventory_import.models.outcome import ImportErrorKind, ImportFailure, ImportSuccess
from inventory_import.models.roles import AliasTable


def test_scenario_a_minimal_row_accepted():
    outcome = import_rows(make_rows(["Produto", "Validade"], ["Leite", "31/12/2025"]))
    assert isinstance(outcome, ImportSuccess)
    assert outcome.ok
    [record] = outcome.records
    assert record.name == "Leite"
    assert record.expiry_date == "2025-12-31"
    assert record.category == "Geral"
    assert record.quantity == 1
    assert outcome.diagnostics.success_count == 1


def test_scenario_b_structural_date_without_calendar_check():
    outcome = import_rows(make_rows(["Produto", "Validade"], ["Arroz", "31-02-2025"]))
    assert outcome.records[0].expiry_date == "2025-02-31"


def test_scenario_c_missing_expiry_column_is_fatal():
    outcome = import_rows(make_rows(["Produto", "Preço"], ["Leite", 4.5]))
    assert isinstance(outcome, ImportFailure)
    assert not outcome.ok
    assert outcome.kind is ImportErrorKind.MISSING_REQUIRED_COLUMNS
    assert "Produto" in outcome.message and "Preço" in outcome.message
    diag = outcome.diagnostics
    assert diag.columns_found == ("Produto", "Preço")
    assert diag.total_rows_found == 1
    assert diag.steps[-1].startswith("FALHA CRÍTICA")
    assert len(diag.raw_preview) == 1


def test_scenario_d_blank_name_ignored():
    headers = ["Produto", "Validade"]
    base = import_rows(make_rows(headers, ["Leite", "31/12/2025"]))
    with_blank = import_rows(make_rows(headers, ["Leite", "31/12/2025"], ["", "31/12/2025"]))
    assert with_blank.diagnostics.success_count == base.diagnostics.success_count
    assert with_blank.diagnostics.skipped_rows == base.diagnostics.skipped_rows
    assert with_blank.diagnostics.total_rows_found == base.diagnostics.total_rows_found + 1
    assert with_blank.diagnostics.ignored_count == 1


def test_scenario_e_invalid_date_skipped_with_reason():
    outcome = import_rows(make_rows(["Produto", "Validade"], ["Pão", "01/01/2026"], ["Leite", "abc"]))
    assert isinstance(outcome, ImportSuccess)
    [skipped] = outcome.diagnostics.skipped_rows
    assert "abc" in skipped.reason
    assert skipped.row_number == 3
    assert [r.name for r in outcome.records] == ["Pão"]


def test_empty_source_is_fatal_with_zero_counts():
    outcome = import_rows([], source=SourceLabel("vazio.xlsx", 0))
    assert isinstance(outcome, ImportFailure)
    assert outcome.kind is ImportErrorKind.EMPTY_SOURCE
    assert outcome.message == EMPTY_SOURCE_MESSAGE
    diag = outcome.diagnostics
    assert diag.total_rows_found == 0
    assert diag.success_count == 0
    assert diag.skipped_rows == ()
    assert diag.steps[0] == "Lendo arquivo: vazio.xlsx (0 bytes)"


def test_counts_partition_total_rows():
    outcome = import_rows(
        make_rows(
            ["Produto", "Validade", "Quantidade"],
            ["Leite", "31/12/2025", 2],
            ["", "", None],
            ["Iogurte", "??", 1],
            ["Queijo", 46022, "3 pacotes"],
            ["   ", "01/01/2026", 1],
        )
    )
    diag = outcome.diagnostics
    assert diag.total_rows_found == 5
    assert diag.success_count == 2
    assert len(diag.skipped_rows) == 1
    assert diag.ignored_count == 2
    assert diag.success_count + len(diag.skipped_rows) + diag.ignored_count == diag.total_rows_found
    assert [r.quantity for r in outcome.records] == [2, 3]


def test_headers_come_from_first_populated_row():
    rows = [{}, {"Produto": Cell.text("Leite"), "Validade": Cell.date(date(2025, 12, 31))}]
    outcome = import_rows(rows)
    assert outcome.diagnostics.columns_found == ("Produto", "Validade")
    assert outcome.records[0].expiry_date == "2025-12-31"
    assert outcome.diagnostics.ignored_count == 1


def test_raw_preview_is_bounded_and_unmodified():
    outcome = import_rows(
        make_rows(["Produto", "Validade"], [" Leite ", "31/12/2025"], ["Pão", "x"], ["Café", "y"])
    )
    preview = outcome.diagnostics.raw_preview
    assert len(preview) == 2
    assert preview[0]["Produto"] == Cell.text(" Leite ")


def test_steps_cover_each_phase():
    outcome = import_rows(
        make_rows(["Produto", "Validade"], ["Leite", "31/12/2025"]),
        source=SourceLabel("estoque.xlsx", 2048),
    )
    steps = outcome.diagnostics.steps
    assert steps[0] == "Lendo arquivo: estoque.xlsx (2048 bytes)"
    assert any(s.startswith("Colunas identificadas:") for s in steps)
    assert any(s.startswith("Processamento concluído:") for s in steps)
    assert steps[-1] == "Importação concluída."


def test_custom_alias_table_is_used():
    table = AliasTable.from_mapping({"name": ["article"], "expiry": ["caducidade"]})
    outcome = import_rows(make_rows(["Article", "Caducidade"], ["Leche", "2025-06-30"]), alias_table=table)
    assert outcome.records[0].name == "Leche"
    default = import_rows(make_rows(["Article", "Caducidade"], ["Leche", "2025-06-30"]))
    assert isinstance(default, ImportFailure)


def test_import_is_deterministic():
    table = make_rows(["Produto", "Validade"], ["Leite", "31/12/2025"], ["X", "bad"])
    assert import_rows(table) == import_rows(table)


@pytest.mark.parametrize("header", ["Validade", "VALIDADE", "validáde"])
def test_expiry_header_variants(header):
    outcome = import_rows(make_rows(["Produto", header], ["Leite", "31/12/2025"]))
    assert outcome.records[0].expiry_date == "2025-12-31"


def test_missing_date_marker_is_skipped_not_accepted():
    outcome = import_rows([to_raw_row({"Produto": "Leite", "Validade": pd.NaT})])
    assert isinstance(outcome, ImportSuccess)
    assert outcome.records == ()
    [skipped] = outcome.diagnostics.skipped_rows
    assert skipped.row_number == 2
    assert skipped.reason == "Data inválida: (vazia)"


def test_missing_name_marker_is_ignored():
    outcome = import_rows(
        [
            to_raw_row({"Produto": pd.NA, "Validade": "31/12/2025"}),
            to_raw_row({"Produto": "Leite", "Validade": "31/12/2025"}),
        ]
    )
    assert isinstance(outcome, ImportSuccess)
    assert [r.name for r in outcome.records] == ["Leite"]
    assert outcome.diagnostics.ignored_count == 1
