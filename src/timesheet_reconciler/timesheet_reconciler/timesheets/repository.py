from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import TimesheetEntry


class TimesheetSource(Protocol):
    def list_entries(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[TimesheetEntry]:
        raise NotImplementedError
