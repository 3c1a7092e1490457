from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_week_key


@dataclass(frozen=True)
class PunchInterval:
    """Domain entity: one clock-in/clock-out span of an employee."""

    employee_id: int
    punch_in: datetime
    punch_out: Optional[datetime] = None

    @property
    def work_date(self) -> date:
        return self.punch_in.date()

    @property
    def is_open(self) -> bool:
        return self.punch_out is None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.punch_out is None:
            return None
        return (self.punch_out - self.punch_in).total_seconds()


@dataclass(frozen=True)
class WeeklyAggregate:
    """One week's attended hours and the deviation from the weekly target."""

    week_start: date
    total_hours: float
    difference_from_target: float

    @property
    def iso_week_key(self) -> str:
        return iso_week_key(self.week_start)


@dataclass(frozen=True)
class AnnotatedPunchRow:
    """Read-model: a punch with the attended hours of its whole week attached."""

    punch: PunchInterval
    work_date: date
    attended_hours: float
    week_start: date
    hours_per_week: float
    difference_per_week: float

    @property
    def iso_week_key(self) -> str:
        return iso_week_key(self.week_start)
