from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import PunchInterval


class PunchRecordSource(Protocol):
    def list_punches(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[PunchInterval]:
        """Punches whose punch_in date lies in [start_date, end_date].

        Raises DataSourceUnavailable when the upstream store cannot be read.
        """

        raise NotImplementedError
