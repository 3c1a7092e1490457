from __future__ import annotations

import logging
from calendar import MONDAY
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.validators import require_date_range
from ..core.constants import (
    DEFAULT_DIFF_EPSILON,
    DEFAULT_ICS_PRODID,
    DEFAULT_PALETTE,
    DEFAULT_WEEKLY_TARGET_HOURS,
    INACTIVE_LEAVE_STATUSES,
)
from ..export.csv_exporter import RECONCILIATION_COLUMNS, TIMESHEET_COLUMNS, WEEKLY_COLUMNS, CsvExporter
from ..export.ics_exporter import IcsExporter
from ..leave.model import CalendarEvent
from ..leave.repository import LeaveSource
from ..leave.service import LeaveEventBuilder
from ..punches.model import AnnotatedPunchRow, WeeklyAggregate
from ..punches.repository import PunchRecordSource
from ..punches.service import WeeklyWindowAggregator
from ..reconciliation.model import ReconciliationRow
from ..reconciliation.service import ReconciliationAggregator
from ..timesheets.model import TimesheetReport
from ..timesheets.repository import TimesheetSource
from ..timesheets.service import TimesheetReportBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklyReport:
    rows: list[AnnotatedPunchRow]
    weeks: list[WeeklyAggregate]


@dataclass(frozen=True)
class LeaveCalendar:
    events: list[CalendarEvent]
    legend: dict[str, str]


class ReportAssembler:
    """Fetch records for one employee and date range and run them through the engine.

    Source errors (DataSourceUnavailable) are not caught here.
    """

    def __init__(
        self,
        punches: PunchRecordSource,
        timesheets: TimesheetSource,
        leave: LeaveSource,
        *,
        reconciliation: Optional[ReconciliationAggregator] = None,
        weekly: Optional[WeeklyWindowAggregator] = None,
        timesheet_builder: Optional[TimesheetReportBuilder] = None,
        leave_builder: Optional[LeaveEventBuilder] = None,
        csv_exporter: Optional[CsvExporter] = None,
        ics_exporter: Optional[IcsExporter] = None,
        epsilon: float = DEFAULT_DIFF_EPSILON,
        target_weekly_hours: float = DEFAULT_WEEKLY_TARGET_HOURS,
        palette: Sequence[str] = DEFAULT_PALETTE,
        prod_id: str = DEFAULT_ICS_PRODID,
    ):
        self._punches = punches
        self._timesheets = timesheets
        self._leave = leave
        self._reconciliation = reconciliation or ReconciliationAggregator()
        self._weekly = weekly or WeeklyWindowAggregator()
        self._timesheet_builder = timesheet_builder or TimesheetReportBuilder()
        self._leave_builder = leave_builder or LeaveEventBuilder()
        self._csv = csv_exporter or CsvExporter()
        self._ics = ics_exporter or IcsExporter()
        self._epsilon = float(epsilon)
        self._target_weekly_hours = float(target_weekly_hours)
        self._palette = tuple(palette)
        self._prod_id = prod_id

    def attendance_diff(
        self,
        *,
        employee_id: int,
        start: Optional[date],
        end: Optional[date],
        epsilon: Optional[float] = None,
    ) -> list[ReconciliationRow]:
        start, end = require_date_range(start, end)
        punches = self._punches.list_punches(employee_id=employee_id, start_date=start, end_date=end)
        entries = self._timesheets.list_entries(employee_id=employee_id, start_date=start, end_date=end)
        logger.info(
            "attendance diff employee_id=%s %s..%s punches=%d entries=%d",
            employee_id, start, end, len(punches), len(entries),
        )
        return self._reconciliation.compute(
            punches,
            entries,
            epsilon=self._epsilon if epsilon is None else epsilon,
        )

    def attendance_diff_csv(self, *, employee_id: int, start: Optional[date], end: Optional[date]) -> str:
        rows = self.attendance_diff(employee_id=employee_id, start=start, end=end)
        return self._csv.export(rows, RECONCILIATION_COLUMNS)

    def weekly_hours(
        self,
        *,
        employee_id: int,
        start: Optional[date],
        end: Optional[date],
        week_start: int = MONDAY,
        target_weekly_hours: Optional[float] = None,
    ) -> WeeklyReport:
        start, end = require_date_range(start, end)
        target = self._target_weekly_hours if target_weekly_hours is None else target_weekly_hours
        punches = self._punches.list_punches(employee_id=employee_id, start_date=start, end_date=end)
        return WeeklyReport(
            rows=self._weekly.annotate(punches, week_start, target),
            weeks=self._weekly.summarize(punches, week_start, target),
        )

    def weekly_hours_csv(self, *, employee_id: int, start: Optional[date], end: Optional[date]) -> str:
        report = self.weekly_hours(employee_id=employee_id, start=start, end=end)
        return self._csv.export(report.rows, WEEKLY_COLUMNS)

    def timesheet(self, *, employee_id: int, start: Optional[date], end: Optional[date]) -> TimesheetReport:
        start, end = require_date_range(start, end)
        entries = self._timesheets.list_entries(employee_id=employee_id, start_date=start, end_date=end)
        return self._timesheet_builder.build(entries)

    def timesheet_csv(self, *, employee_id: int, start: Optional[date], end: Optional[date]) -> str:
        report = self.timesheet(employee_id=employee_id, start=start, end=end)
        return self._csv.export(report.rows, TIMESHEET_COLUMNS)

    def leave_calendar(
        self,
        *,
        start: Optional[date],
        end: Optional[date],
        employee_id: Optional[int] = None,
    ) -> LeaveCalendar:
        start, end = require_date_range(start, end)
        spans = self._leave.list_leave(start_date=start, end_date=end, employee_id=employee_id)
        events, colors = self._leave_builder.build_with_colors(spans, self._palette)
        return LeaveCalendar(events=events, legend=dict(colors.colors))

    def leave_calendar_ics(
        self,
        *,
        start: Optional[date],
        end: Optional[date],
        employee_id: Optional[int] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        calendar = self.leave_calendar(start=start, end=end, employee_id=employee_id)
        events = _one_event_per_slot(calendar.events)
        return self._ics.export(events, self._prod_id, generated_at=generated_at)


def _is_inactive(event: CalendarEvent) -> bool:
    return event.status.strip().lower() in INACTIVE_LEAVE_STATUSES


def _one_event_per_slot(events: list[CalendarEvent]) -> list[CalendarEvent]:
    """Keep one event per (employee, leave_type, start_date).

    A cancelled or rejected event gives way to a live one for the same slot,
    otherwise the first event wins. Order of first appearance is kept.
    """
    chosen: dict[tuple, CalendarEvent] = {}
    for event in events:
        slot = (event.employee_name, event.leave_type, event.start_date)
        current = chosen.get(slot)
        if current is None or (_is_inactive(current) and not _is_inactive(event)):
            chosen[slot] = event
    if len(chosen) < len(events):
        logger.info("Merged %d leave events sharing a calendar slot", len(events) - len(chosen))
    return list(chosen.values())
