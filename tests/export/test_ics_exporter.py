from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.timesheet_reconciler.timesheet_reconciler.core.exceptions import SerializationError
from src.timesheet_reconciler.timesheet_reconciler.export.ics_exporter import IcsExporter
from src.timesheet_reconciler.timesheet_reconciler.leave.model import CalendarEvent, LeaveSpan
from src.timesheet_reconciler.timesheet_reconciler.leave.service import LeaveEventBuilder


def events_for(*spans: LeaveSpan) -> list[CalendarEvent]:
    return LeaveEventBuilder().build(spans)


def leave(
    name: str, start: date, end: date, leave_type: str = "Vacation", status: str = "Scheduled"
) -> LeaveSpan:
    return LeaveSpan(
        employee_id=1,
        employee_name=name,
        leave_type=leave_type,
        status=status,
        start_date=start,
        end_date=end,
    )


def unfold(text: str) -> list[str]:
    return text.replace("\r\n ", "").split("\r\n")


def test_document_envelope_and_one_vevent_per_event():
    events = events_for(
        leave("Alice", date(2024, 3, 1), date(2024, 3, 3)),
        leave("Bob", date(2024, 3, 4), date(2024, 3, 4)),
        leave("Carol", date(2024, 4, 1), date(2024, 4, 10), "Sick"),
    )

    text = IcsExporter().export(events, "-//Test//EN")
    lines = unfold(text)

    assert text.startswith("BEGIN:VCALENDAR\r\n")
    assert text.endswith("END:VCALENDAR\r\n")
    assert lines[:5] == ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//Test//EN", "CALSCALE:GREGORIAN", "METHOD:PUBLISH"]
    assert lines.count("BEGIN:VEVENT") == 3
    assert lines.count("END:VEVENT") == 3

    depth = 0
    for line in lines:
        if line == "BEGIN:VEVENT":
            assert depth == 0
            depth += 1
        elif line == "END:VEVENT":
            assert depth == 1
            depth -= 1
    assert depth == 0


def test_vevent_fields_for_all_day_leave():
    events = events_for(leave("Alice", date(2024, 3, 1), date(2024, 3, 3)))

    lines = unfold(IcsExporter().export(events, "-//Test//EN"))

    assert "SUMMARY:Alice - Vacation" in lines
    assert "DESCRIPTION:Vacation (Scheduled)" in lines
    assert "CATEGORIES:Vacation" in lines
    assert "STATUS:CONFIRMED" in lines
    assert "TRANSP:TRANSPARENT" in lines
    assert "CLASS:PUBLIC" in lines
    assert "DTSTART;VALUE=DATE:20240301" in lines
    assert "DTEND;VALUE=DATE:20240304" in lines
    assert "DTSTAMP:20240301T000000Z" in lines


def test_uids_are_unique_and_stable():
    events = events_for(
        leave("Alice", date(2024, 3, 1), date(2024, 3, 3)),
        leave("Alice", date(2024, 3, 1), date(2024, 3, 3), "Sick"),
    )
    exporter = IcsExporter(uid_domain="example.org")

    first = [line for line in unfold(exporter.export(events, "-//Test//EN")) if line.startswith("UID:")]
    second = [line for line in unfold(exporter.export(events, "-//Test//EN")) if line.startswith("UID:")]

    assert len(set(first)) == 2
    assert first == second
    assert all(uid.endswith("@example.org") for uid in first)


def test_colliding_uid_fails_before_output():
    event = events_for(leave("Alice", date(2024, 3, 1), date(2024, 3, 3)))[0]

    with pytest.raises(SerializationError):
        IcsExporter().export([event, event], "-//Test//EN")


def test_reserved_characters_are_escaped():
    events = events_for(leave("Doe, Jane", date(2024, 3, 1), date(2024, 3, 1), "Training; external\nday"))

    lines = unfold(IcsExporter().export(events, "-//Test//EN"))

    assert "SUMMARY:Doe\\, Jane - Training\\; external\\nday" in lines
    assert "CATEGORIES:Training\\; external\\nday" in lines


def test_backslash_and_crlf_are_escaped():
    events = events_for(leave("Back\\slash", date(2024, 3, 1), date(2024, 3, 1), "Off\r\nsite"))

    lines = unfold(IcsExporter().export(events, "-//Test//EN"))

    assert "SUMMARY:Back\\\\slash - Off\\nsite" in lines


def test_long_lines_are_folded_to_75_octets():
    name = "Ä" * 80
    events = events_for(leave(name, date(2024, 3, 1), date(2024, 3, 1)))

    text = IcsExporter().export(events, "-//Test//EN")

    for physical in text.split("\r\n"):
        assert len(physical.encode("utf-8")) <= 75
    assert f"SUMMARY:{name} - Vacation" in unfold(text)


def test_separator_characters_in_names_do_not_collide():
    events = events_for(
        leave("A|B", date(2024, 3, 1), date(2024, 3, 1), "C"),
        leave("A", date(2024, 3, 1), date(2024, 3, 1), "B|C"),
    )

    lines = unfold(IcsExporter().export(events, "-//Test//EN"))

    assert len({line for line in lines if line.startswith("UID:")}) == 2


def test_same_day_with_other_status_shares_the_uid():
    cancelled, rebooked = events_for(
        leave("Alice", date(2024, 3, 1), date(2024, 3, 1), status="Cancelled"),
        leave("Alice", date(2024, 3, 1), date(2024, 3, 1), status="Scheduled"),
    )
    exporter = IcsExporter()

    assert exporter.uid_for(cancelled) == exporter.uid_for(rebooked)
    with pytest.raises(SerializationError):
        exporter.export([cancelled, rebooked], "-//Test//EN")


def test_dtstamp_defaults_to_event_start():
    events = events_for(
        leave("Alice", date(2024, 3, 1), date(2024, 3, 3)),
        leave("Bob", date(2024, 5, 6), date(2024, 5, 6)),
    )

    lines = unfold(IcsExporter().export(events, "-//Test//EN"))

    assert [line for line in lines if line.startswith("DTSTAMP")] == [
        "DTSTAMP:20240301T000000Z",
        "DTSTAMP:20240506T000000Z",
    ]


def test_dtstamp_when_generation_time_given():
    events = events_for(leave("Alice", date(2024, 3, 1), date(2024, 3, 3)))

    lines = unfold(
        IcsExporter().export(events, "-//Test//EN", generated_at=datetime(2024, 2, 1, 12, 30, tzinfo=timezone.utc))
    )

    assert "DTSTAMP:20240201T123000Z" in lines


def test_no_events_is_still_a_valid_calendar():
    text = IcsExporter().export([], "-//Test//EN")

    assert unfold(text) == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Test//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "END:VCALENDAR",
        "",
    ]


def test_empty_prodid_fails():
    with pytest.raises(SerializationError):
        IcsExporter().export([], " ")
