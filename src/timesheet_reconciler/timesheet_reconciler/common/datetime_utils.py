from __future__ import annotations

from calendar import MONDAY
from datetime import date, datetime, timedelta

from ..core.constants import SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def seconds_to_hours(seconds: float) -> float:
    return seconds / SECONDS_PER_HOUR


def week_start_of(day: date, week_start: int = MONDAY) -> date:
    """First day of the week containing ``day``.

    ``week_start`` uses the ``calendar`` weekday numbers (MONDAY=0 .. SUNDAY=6).
    """
    offset = (day.weekday() - week_start) % 7
    return day - timedelta(days=offset)


def iso_week_key(week_first_day: date) -> str:
    """Label a week as ``YYYY-Www``.

    Labelled by the fourth day of the week so Monday-starting weeks get their
    exact ISO week number.
    """
    year, week, _ = (week_first_day + timedelta(days=3)).isocalendar()
    return f"{year}-W{week:02d}"
