from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..leave.model import LeaveSpan
from ..punches.model import PunchInterval
from ..timesheets.model import TimesheetEntry


@dataclass
class InMemoryPunchSource:
    punches: Sequence[PunchInterval] = field(default_factory=list)

    def list_punches(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[PunchInterval]:
        return [
            p
            for p in self.punches
            if p.employee_id == employee_id and start_date <= p.work_date <= end_date
        ]


@dataclass
class InMemoryTimesheetSource:
    entries: Sequence[TimesheetEntry] = field(default_factory=list)

    def list_entries(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[TimesheetEntry]:
        return [
            e
            for e in self.entries
            if e.employee_id == employee_id and start_date <= e.date <= end_date
        ]


@dataclass
class InMemoryLeaveSource:
    spans: Sequence[LeaveSpan] = field(default_factory=list)

    def list_leave(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveSpan]:
        return [
            s
            for s in self.spans
            if (employee_id is None or s.employee_id == employee_id)
            and s.start_date <= end_date
            and s.end_date >= start_date
        ]
