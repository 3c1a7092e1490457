"""Example: drive the report engine directly (no Flask).

Controllers are a thin layer; the aggregation lives in the services.
"""

from datetime import date, datetime

from src.timesheet_reconciler.timesheet_reconciler.leave.model import LeaveSpan
from src.timesheet_reconciler.timesheet_reconciler.punches.model import PunchInterval
from src.timesheet_reconciler.timesheet_reconciler.report.service import ReportAssembler
from src.timesheet_reconciler.timesheet_reconciler.sources.memory import (
    InMemoryLeaveSource,
    InMemoryPunchSource,
    InMemoryTimesheetSource,
)
from src.timesheet_reconciler.timesheet_reconciler.timesheets.model import TimesheetEntry


def main():
    assembler = ReportAssembler(
        InMemoryPunchSource([PunchInterval(1, datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))]),
        InMemoryTimesheetSource([TimesheetEntry(1, date(2024, 1, 1), "Intranet", "Development", 7 * 3600)]),
        InMemoryLeaveSource([LeaveSpan(1, "Alice Smith", "Vacation", "Scheduled", date(2024, 3, 1), date(2024, 3, 3))]),
    )
    start, end = date(2024, 1, 1), date(2024, 3, 31)

    print(assembler.attendance_diff_csv(employee_id=1, start=start, end=end))
    print(assembler.leave_calendar_ics(start=start, end=end))


if __name__ == "__main__":
    main()
