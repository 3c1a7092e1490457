from __future__ import annotations

import logging
from datetime import date, datetime

import pytest

from src.timesheet_reconciler.timesheet_reconciler.core.exceptions import InvalidInterval, ValidationError
from src.timesheet_reconciler.timesheet_reconciler.punches.factory import OpenPunchStrategyFactory
from src.timesheet_reconciler.timesheet_reconciler.punches.model import PunchInterval
from src.timesheet_reconciler.timesheet_reconciler.reconciliation.service import ReconciliationAggregator
from src.timesheet_reconciler.timesheet_reconciler.timesheets.model import TimesheetEntry


def punch(day: date, start_h: int, end_h: int | None, *, start_m: int = 0, end_m: int = 0) -> PunchInterval:
    return PunchInterval(
        employee_id=1,
        punch_in=datetime(day.year, day.month, day.day, start_h, start_m),
        punch_out=datetime(day.year, day.month, day.day, end_h, end_m) if end_h is not None else None,
    )


def booking(day: date, hours: float, project: str = "Intranet") -> TimesheetEntry:
    return TimesheetEntry(
        employee_id=1,
        date=day,
        project=project,
        activity="Development",
        duration_seconds=int(hours * 3600),
    )


def test_eight_hours_attended_seven_booked():
    day = date(2024, 1, 1)

    rows = ReconciliationAggregator().compute([punch(day, 9, 17)], [booking(day, 7)])

    assert len(rows) == 1
    assert rows[0].date == day
    assert rows[0].attended_hours == pytest.approx(8.0)
    assert rows[0].booked_hours == pytest.approx(7.0)
    assert rows[0].difference_hours == pytest.approx(1.0)


def test_difference_is_sum_of_punches_minus_sum_of_bookings_on_one_date():
    day = date(2024, 1, 2)
    punches = [punch(day, 8, 12), punch(day, 13, 17, end_m=15)]
    entries = [booking(day, 3.5, "A"), booking(day, 2.25, "B"), booking(day, 1, "C")]

    rows = ReconciliationAggregator().compute(punches, entries)

    expected = (4 + 4.25) - (3.5 + 2.25 + 1)
    assert rows[0].difference_hours == pytest.approx(expected)


def test_outer_join_keeps_dates_present_on_one_side_only():
    d1, d2, d3 = date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)

    rows = ReconciliationAggregator().compute(
        [punch(d3, 9, 17), punch(d1, 9, 12)],
        [booking(d2, 5)],
    )

    assert [r.date for r in rows] == [d1, d2, d3]
    assert rows[0].booked_hours == 0
    assert rows[1].attended_hours == 0
    assert rows[1].difference_hours == pytest.approx(-5.0)


def test_balanced_days_are_filtered_out():
    day = date(2024, 1, 1)

    rows = ReconciliationAggregator().compute([punch(day, 9, 17)], [booking(day, 8)])

    assert rows == []


def test_equal_totals_split_differently_are_not_a_difference():
    day = date(2024, 1, 1)
    # 0.1h + 0.2h punched, 0.1h + 0.2h booked
    punches = [punch(day, 9, 9, end_m=6), punch(day, 10, 10, end_m=12)]
    entries = [booking(day, 0.1), booking(day, 0.2)]

    assert ReconciliationAggregator().compute(punches, entries) == []


def test_caller_epsilon_widens_the_tolerance():
    day = date(2024, 1, 1)
    punches = [punch(day, 9, 17, end_m=3)]

    aggregator = ReconciliationAggregator()

    assert len(aggregator.compute(punches, [booking(day, 8)])) == 1
    assert aggregator.compute(punches, [booking(day, 8)], epsilon=0.1) == []


def test_negative_epsilon_is_rejected():
    with pytest.raises(ValidationError):
        ReconciliationAggregator().compute([], [], epsilon=-1)


def test_empty_input_gives_empty_result():
    assert ReconciliationAggregator().compute([], []) == []


def test_open_punch_is_excluded_and_logged(caplog):
    day = date(2024, 1, 1)

    with caplog.at_level(logging.WARNING):
        rows = ReconciliationAggregator().compute([punch(day, 9, 12), punch(day, 13, None)], [booking(day, 2)])

    assert rows[0].attended_hours == pytest.approx(3.0)
    assert "open punch" in caplog.text


def test_open_punch_fails_under_strict_policy():
    strategy = OpenPunchStrategyFactory().for_policy("STRICT")

    with pytest.raises(InvalidInterval):
        ReconciliationAggregator(strategy=strategy).compute([punch(date(2024, 1, 1), 9, None)], [])


def test_punch_out_before_punch_in_always_fails():
    bad = punch(date(2024, 1, 1), 17, 9)

    with pytest.raises(InvalidInterval) as exc_info:
        ReconciliationAggregator().compute([bad], [])

    assert exc_info.value.punch == bad


def test_negative_booking_is_rejected():
    entry = TimesheetEntry(employee_id=1, date=date(2024, 1, 1), project="P", activity="A", duration_seconds=-60)

    with pytest.raises(ValidationError):
        ReconciliationAggregator().compute([], [entry])


def test_compute_all_returns_balanced_days_too():
    day = date(2024, 1, 1)

    rows = ReconciliationAggregator().compute_all([punch(day, 9, 17)], [booking(day, 8)])

    assert len(rows) == 1
    assert rows[0].difference_hours == 0
