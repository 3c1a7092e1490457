from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from src.timesheet_reconciler.timesheet_reconciler.core.enums import ColumnKind
from src.timesheet_reconciler.timesheet_reconciler.core.exceptions import SerializationError
from src.timesheet_reconciler.timesheet_reconciler.export.csv_exporter import (
    RECONCILIATION_COLUMNS,
    TIMESHEET_COLUMNS,
    ColumnSpec,
    CsvExporter,
)
from src.timesheet_reconciler.timesheet_reconciler.reconciliation.model import ReconciliationRow
from src.timesheet_reconciler.timesheet_reconciler.timesheets.model import TimesheetRow


def parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_reconciliation_rows_with_two_decimals():
    rows = [ReconciliationRow(date=date(2024, 1, 1), attended_hours=8.0, booked_hours=7.0)]

    text = CsvExporter().export(rows, RECONCILIATION_COLUMNS)

    assert text == "Date,Attended (h),Booked (h),Difference (h)\r\n2024-01-01,8.00,7.00,1.00\r\n"


def test_empty_input_yields_header_only():
    text = CsvExporter().export([], RECONCILIATION_COLUMNS)

    assert parse(text) == [["Date", "Attended (h)", "Booked (h)", "Difference (h)"]]


def test_text_fields_are_quoted_and_round_trip():
    comment = 'Meeting, "kickoff"\nand notes'
    rows = [
        TimesheetRow(
            employee_id=3,
            date=date(2024, 2, 1),
            hours=1.3333333,
            overall_hours=2.5,
            project="Intranet; Phase 2",
            activity="Design",
            comment=comment,
        )
    ]

    text = CsvExporter().export(rows, TIMESHEET_COLUMNS)
    parsed = parse(text)

    assert '"Meeting, ""kickoff""\nand notes"' in text
    assert parsed[1] == ["3", "2024-02-01", "1.33", "2.50", "Intranet; Phase 2", "Design", comment]


def test_mappings_are_accepted_in_column_order():
    columns = [ColumnSpec("b", "B", ColumnKind.HOURS), ColumnSpec("a", "A")]

    text = CsvExporter().export([{"a": "x", "b": 1.5}], columns)

    assert parse(text) == [["B", "A"], ["1.50", "x"]]


def test_none_text_becomes_empty_cell():
    text = CsvExporter().export([{"a": None}], [ColumnSpec("a", "A")])

    assert parse(text)[1] == [""]


def test_missing_field_fails_without_partial_output():
    columns = [ColumnSpec("a", "A")]

    with pytest.raises(SerializationError):
        CsvExporter().export([{"a": "ok"}, {"b": "missing a"}], columns)


def test_non_numeric_hours_fail():
    with pytest.raises(SerializationError):
        CsvExporter().export([{"h": "eight"}], [ColumnSpec("h", "H", ColumnKind.HOURS)])


def test_infinite_hours_fail():
    with pytest.raises(SerializationError):
        CsvExporter().export([{"h": float("inf")}], [ColumnSpec("h", "H", ColumnKind.HOURS)])


def test_unencodable_text_fails():
    with pytest.raises(SerializationError):
        CsvExporter().export([{"t": "bad \udc80 surrogate"}], [ColumnSpec("t", "T")])


def test_empty_column_spec_fails():
    with pytest.raises(SerializationError):
        CsvExporter().export([], [])


def test_tiny_negative_hours_do_not_print_negative_zero():
    columns = [ColumnSpec("difference_hours", "Difference (h)", ColumnKind.HOURS)]

    text = CsvExporter().export([{"difference_hours": 8.0 - 8.001}, {"difference_hours": -0.004}], columns)

    assert parse(text)[1:] == [["0.00"], ["0.00"]]
