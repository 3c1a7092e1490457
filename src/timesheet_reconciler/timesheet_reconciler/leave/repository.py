from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LeaveSpan


class LeaveSource(Protocol):
    def list_leave(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveSpan]:
        """Leave spans overlapping [start_date, end_date].

        employee_id=None lists every employee (team calendar).
        """

        raise NotImplementedError
