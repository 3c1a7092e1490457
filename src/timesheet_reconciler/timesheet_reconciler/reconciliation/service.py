from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import seconds_to_hours
from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_DIFF_EPSILON
from ..core.exceptions import ValidationError
from ..punches.factory import OpenPunchStrategyFactory
from ..punches.model import PunchInterval
from ..punches.strategies.base import OpenPunchStrategy
from ..timesheets.model import TimesheetEntry
from .model import ReconciliationRow

logger = logging.getLogger(__name__)


class ReconciliationAggregator:
    """Per-date comparison of attended (punched) and booked (timesheet) hours."""

    def __init__(self, *, strategy: Optional[OpenPunchStrategy] = None):
        self._strategy = strategy or OpenPunchStrategyFactory().for_policy("EXCLUDE")

    def _attended_seconds_by_date(self, punches: Iterable[PunchInterval]) -> dict[date, float]:
        by_date: dict[date, float] = {}
        for p in punches:
            seconds = self._strategy.attended_seconds(p)
            if seconds is None:
                continue
            by_date[p.work_date] = by_date.get(p.work_date, 0.0) + seconds
        return by_date

    @staticmethod
    def _booked_seconds_by_date(entries: Iterable[TimesheetEntry]) -> dict[date, float]:
        by_date: dict[date, float] = {}
        for e in entries:
            seconds = require_non_negative(e.duration_seconds, "duration_seconds")
            by_date[e.date] = by_date.get(e.date, 0.0) + seconds
        return by_date

    def compute_all(
        self,
        punches: Iterable[PunchInterval],
        timesheet_entries: Iterable[TimesheetEntry],
    ) -> list[ReconciliationRow]:
        """Every date that has punches and/or bookings, without filtering."""

        attended = self._attended_seconds_by_date(punches)
        booked = self._booked_seconds_by_date(timesheet_entries)

        return [
            ReconciliationRow(
                date=day,
                attended_hours=seconds_to_hours(attended.get(day, 0.0)),
                booked_hours=seconds_to_hours(booked.get(day, 0.0)),
            )
            for day in sorted(attended.keys() | booked.keys())
        ]

    def compute(
        self,
        punches: Iterable[PunchInterval],
        timesheet_entries: Iterable[TimesheetEntry],
        epsilon: float = DEFAULT_DIFF_EPSILON,
    ) -> list[ReconciliationRow]:
        """Dates whose attended and booked hours differ by more than ``epsilon`` hours."""

        if epsilon is None or epsilon < 0:
            raise ValidationError("epsilon must be >= 0")

        rows = self.compute_all(punches, timesheet_entries)
        diffs = [r for r in rows if abs(r.difference_hours) > epsilon]
        logger.debug("Reconciled %d dates, %d with differences", len(rows), len(diffs))
        return diffs
