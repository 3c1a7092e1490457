from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TimesheetEntry:
    """Domain entity: time an employee booked against a project activity."""

    employee_id: int
    date: date
    project: str
    activity: str
    duration_seconds: int
    comment: Optional[str] = None


@dataclass(frozen=True)
class TimesheetRow:
    """Read-model for the timesheet listing and its CSV export."""

    employee_id: int
    date: date
    hours: float
    overall_hours: float
    project: str
    activity: str
    comment: str = ""


@dataclass(frozen=True)
class TimesheetReport:
    rows: list[TimesheetRow]
    total_hours: float
