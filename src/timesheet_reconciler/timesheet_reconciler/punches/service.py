from __future__ import annotations

from calendar import MONDAY
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import seconds_to_hours, week_start_of
from ..core.constants import DEFAULT_WEEKLY_TARGET_HOURS
from ..core.exceptions import ValidationError
from .factory import OpenPunchStrategyFactory
from .model import AnnotatedPunchRow, PunchInterval, WeeklyAggregate
from .strategies.base import OpenPunchStrategy


class WeeklyWindowAggregator:
    """Attach the attended hours of a punch's whole week to every punch row.

    Works in two passes: a group-by reduction of attended seconds per week,
    then a windowed annotation pass over the punches. Nothing is cached
    between calls.
    """

    def __init__(self, *, strategy: Optional[OpenPunchStrategy] = None):
        self._strategy = strategy or OpenPunchStrategyFactory().for_policy("EXCLUDE")

    def _attended(self, punches: Iterable[PunchInterval]) -> list[tuple[PunchInterval, float]]:
        out = []
        for p in sorted(punches, key=lambda p: p.punch_in):
            seconds = self._strategy.attended_seconds(p)
            if seconds is None:
                continue
            out.append((p, seconds))
        return out

    @staticmethod
    def _check_week_start(week_start: int) -> int:
        try:
            day = int(week_start)
        except (TypeError, ValueError):
            raise ValidationError(f"week_start must be a weekday number 0-6, got {week_start!r}")
        if day not in range(7):
            raise ValidationError(f"week_start must be a weekday number 0-6, got {week_start!r}")
        return day

    @staticmethod
    def _reduce(attended: list[tuple[PunchInterval, float]], week_start: int) -> dict[date, float]:
        seconds_per_week: dict[date, float] = {}
        for p, seconds in attended:
            key = week_start_of(p.work_date, week_start)
            seconds_per_week[key] = seconds_per_week.get(key, 0.0) + seconds
        return seconds_per_week

    def summarize(
        self,
        punches: Iterable[PunchInterval],
        week_start: int = MONDAY,
        target_weekly_hours: float = DEFAULT_WEEKLY_TARGET_HOURS,
    ) -> list[WeeklyAggregate]:
        week_start = self._check_week_start(week_start)
        seconds_per_week = self._reduce(self._attended(punches), week_start)

        summary = []
        for key in sorted(seconds_per_week):
            total = seconds_to_hours(seconds_per_week[key])
            summary.append(
                WeeklyAggregate(
                    week_start=key,
                    total_hours=total,
                    difference_from_target=total - float(target_weekly_hours),
                )
            )
        return summary

    def annotate(
        self,
        punches: Iterable[PunchInterval],
        week_start: int = MONDAY,
        target_weekly_hours: float = DEFAULT_WEEKLY_TARGET_HOURS,
    ) -> list[AnnotatedPunchRow]:
        week_start = self._check_week_start(week_start)
        attended = self._attended(punches)
        seconds_per_week = self._reduce(attended, week_start)

        rows = []
        for p, seconds in attended:
            key = week_start_of(p.work_date, week_start)
            hours_per_week = seconds_to_hours(seconds_per_week[key])
            rows.append(
                AnnotatedPunchRow(
                    punch=p,
                    work_date=p.work_date,
                    attended_hours=seconds_to_hours(seconds),
                    week_start=key,
                    hours_per_week=hours_per_week,
                    difference_per_week=hours_per_week - float(target_weekly_hours),
                )
            )
        return rows
