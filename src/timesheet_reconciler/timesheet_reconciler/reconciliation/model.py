from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ReconciliationRow:
    """Attended vs booked hours for one calendar date."""

    date: date
    attended_hours: float
    booked_hours: float

    @property
    def difference_hours(self) -> float:
        return self.attended_hours - self.booked_hours
