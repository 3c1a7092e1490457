from __future__ import annotations

import csv
import io
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Sequence

from ..core.constants import CSV_MIMETYPE
from ..core.enums import ColumnKind
from ..core.exceptions import SerializationError


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    header: str
    kind: ColumnKind = ColumnKind.TEXT


RECONCILIATION_COLUMNS = (
    ColumnSpec("date", "Date", ColumnKind.DATE),
    ColumnSpec("attended_hours", "Attended (h)", ColumnKind.HOURS),
    ColumnSpec("booked_hours", "Booked (h)", ColumnKind.HOURS),
    ColumnSpec("difference_hours", "Difference (h)", ColumnKind.HOURS),
)

TIMESHEET_COLUMNS = (
    ColumnSpec("employee_id", "Employee"),
    ColumnSpec("date", "Date", ColumnKind.DATE),
    ColumnSpec("hours", "Hours", ColumnKind.HOURS),
    ColumnSpec("overall_hours", "Overall", ColumnKind.HOURS),
    ColumnSpec("project", "Project"),
    ColumnSpec("activity", "Activity"),
    ColumnSpec("comment", "Comment"),
)

WEEKLY_COLUMNS = (
    ColumnSpec("work_date", "Date", ColumnKind.DATE),
    ColumnSpec("iso_week_key", "Week"),
    ColumnSpec("attended_hours", "Attended (h)", ColumnKind.HOURS),
    ColumnSpec("hours_per_week", "Hours per week", ColumnKind.HOURS),
    ColumnSpec("difference_per_week", "Difference per week", ColumnKind.HOURS),
)


class CsvExporter:
    """RFC 4180 CSV: header line, CRLF records, hours with two decimals."""

    mimetype = CSV_MIMETYPE

    @staticmethod
    def _value(row: Any, column: ColumnSpec, index: int) -> Any:
        if isinstance(row, Mapping):
            if column.field not in row:
                raise SerializationError(f"Row {index} has no field {column.field!r}")
            return row[column.field]
        try:
            return getattr(row, column.field)
        except AttributeError:
            raise SerializationError(f"Row {index} has no field {column.field!r}")

    @staticmethod
    def _format(value: Any, column: ColumnSpec, index: int) -> str:
        if column.kind == ColumnKind.HOURS:
            try:
                hours = float(value)
            except (TypeError, ValueError):
                raise SerializationError(f"Row {index}: {column.field}={value!r} is not a number of hours")
            if not math.isfinite(hours):
                raise SerializationError(f"Row {index}: {column.field}={value!r} is not finite")
            return f"{round(hours, 2) + 0.0:.2f}"

        if column.kind == ColumnKind.DATE:
            if isinstance(value, date):
                return value.isoformat()
            if isinstance(value, str):
                return value
            raise SerializationError(f"Row {index}: {column.field}={value!r} is not a date")

        text = "" if value is None else str(value)
        try:
            text.encode("utf-8")
        except UnicodeEncodeError:
            raise SerializationError(f"Row {index}: {column.field} cannot be encoded as UTF-8")
        return text

    def export(self, rows: Iterable[Any], column_spec: Sequence[ColumnSpec]) -> str:
        if not column_spec:
            raise SerializationError("column_spec must name at least one column")

        # all-or-nothing: every cell is formatted before anything is written
        records = [
            [self._format(self._value(row, c, i), c, i) for c in column_spec]
            for i, row in enumerate(rows)
        ]

        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\r\n")
        writer.writerow([c.header for c in column_spec])
        writer.writerows(records)
        return out.getvalue()
