from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .export.csv_exporter import CsvExporter
from .export.ics_exporter import IcsExporter
from .leave.repository import LeaveSource
from .leave.service import LeaveEventBuilder
from .punches.factory import OpenPunchStrategyFactory
from .punches.repository import PunchRecordSource
from .punches.service import WeeklyWindowAggregator
from .reconciliation.service import ReconciliationAggregator
from .report.service import ReportAssembler
from .sources.memory import InMemoryLeaveSource, InMemoryPunchSource, InMemoryTimesheetSource
from .sources.snapshot import SnapshotSources
from .timesheets.repository import TimesheetSource
from .timesheets.service import TimesheetReportBuilder


@dataclass(frozen=True)
class Container:
    punch_source: PunchRecordSource
    timesheet_source: TimesheetSource
    leave_source: LeaveSource

    reconciliation: ReconciliationAggregator
    weekly: WeeklyWindowAggregator
    timesheet_builder: TimesheetReportBuilder
    leave_builder: LeaveEventBuilder
    csv_exporter: CsvExporter
    ics_exporter: IcsExporter

    report_assembler: ReportAssembler


def build_container(
    *,
    report_config: dict,
    punch_source: Optional[PunchRecordSource] = None,
    timesheet_source: Optional[TimesheetSource] = None,
    leave_source: Optional[LeaveSource] = None,
) -> Container:
    snapshot_path = report_config.get("snapshot_path")
    if snapshot_path:
        snapshot = SnapshotSources(snapshot_path)
        punch_source = punch_source or snapshot
        timesheet_source = timesheet_source or snapshot
        leave_source = leave_source or snapshot

    punch_source = punch_source or InMemoryPunchSource()
    timesheet_source = timesheet_source or InMemoryTimesheetSource()
    leave_source = leave_source or InMemoryLeaveSource()

    strategy = OpenPunchStrategyFactory().for_policy(report_config.get("open_punch_policy", "EXCLUDE"))
    reconciliation = ReconciliationAggregator(strategy=strategy)
    weekly = WeeklyWindowAggregator(strategy=strategy)
    timesheet_builder = TimesheetReportBuilder()
    leave_builder = LeaveEventBuilder()
    csv_exporter = CsvExporter()
    ics_exporter = IcsExporter(uid_domain=report_config["ics_uid_domain"])

    report_assembler = ReportAssembler(
        punch_source,
        timesheet_source,
        leave_source,
        reconciliation=reconciliation,
        weekly=weekly,
        timesheet_builder=timesheet_builder,
        leave_builder=leave_builder,
        csv_exporter=csv_exporter,
        ics_exporter=ics_exporter,
        epsilon=float(report_config["epsilon"]),
        target_weekly_hours=float(report_config["target_weekly_hours"]),
        palette=tuple(report_config["palette"]),
        prod_id=str(report_config["ics_prodid"]),
    )

    return Container(
        punch_source=punch_source,
        timesheet_source=timesheet_source,
        leave_source=leave_source,
        reconciliation=reconciliation,
        weekly=weekly,
        timesheet_builder=timesheet_builder,
        leave_builder=leave_builder,
        csv_exporter=csv_exporter,
        ics_exporter=ics_exporter,
        report_assembler=report_assembler,
    )
