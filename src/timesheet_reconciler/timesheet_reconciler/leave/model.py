from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class LeaveSpan:
    """Domain entity: a leave period, end_date inclusive."""

    employee_id: int
    employee_name: str
    leave_type: str
    status: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class CalendarEvent:
    """All-day calendar event; end_date is exclusive."""

    title: str
    start_date: date
    end_date: date
    color: str
    employee_name: str
    leave_type: str
    status: str
    all_day: bool = True

    def to_dict(self) -> dict:
        """JSON shape consumed by the interactive calendar."""
        return {
            "title": self.title,
            "start": self.start_date.isoformat(),
            "end": self.end_date.isoformat(),
            "color": self.color,
            "allDay": self.all_day,
        }
