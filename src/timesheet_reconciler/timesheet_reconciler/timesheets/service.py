from __future__ import annotations

from typing import Iterable

from ..common.datetime_utils import seconds_to_hours
from ..common.validators import require_non_negative
from .model import TimesheetEntry, TimesheetReport, TimesheetRow


class TimesheetReportBuilder:
    """Timesheet listing: one row per booking plus the overall total of the range."""

    def build(self, entries: Iterable[TimesheetEntry]) -> TimesheetReport:
        ordered = sorted(entries, key=lambda e: (e.employee_id, e.date))

        total_seconds = 0
        for e in ordered:
            total_seconds += require_non_negative(e.duration_seconds, "duration_seconds")
        overall = seconds_to_hours(total_seconds)

        rows = [
            TimesheetRow(
                employee_id=e.employee_id,
                date=e.date,
                hours=seconds_to_hours(e.duration_seconds),
                overall_hours=overall,
                project=e.project,
                activity=e.activity,
                comment=e.comment or "",
            )
            for e in ordered
        ]
        return TimesheetReport(rows=rows, total_hours=overall)
