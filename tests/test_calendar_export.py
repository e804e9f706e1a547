"""Tests for calendar_export."""
from datetime import date, datetime, time

import pytest
from icalendar import Calendar

from calendar_export import parse_time_window, plan_to_ics
from models import StudyEvent


def _event(duration: int, window: str = "09:00 - 17:00") -> StudyEvent:
    return StudyEvent(
        id="study-2024-01-01-0",
        day=date(2024, 1, 1),
        subject="Maths Paper 1",
        tasks=("Problem solving practice", "Formula review"),
        time_window=window,
        duration=duration,
    )


def _vevents(data: bytes) -> list:
    return [c for c in Calendar.from_ical(data).walk() if c.name == "VEVENT"]


def test_parse_time_window() -> None:
    assert parse_time_window("09:00 - 17:30") == (time(9), time(17, 30))


def test_parse_time_window_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_time_window("morning")


def test_session_starts_at_window_start() -> None:
    data, warnings = plan_to_ics([_event(2)])
    assert warnings == []
    (ev,) = _vevents(data)
    assert ev.get("DTSTART").dt == datetime(2024, 1, 1, 9, 0)
    assert ev.get("DTEND").dt == datetime(2024, 1, 1, 11, 0)
    assert str(ev.get("SUMMARY")) == "Study: Maths Paper 1"
    assert str(ev.get("UID")) == "study-2024-01-01-0@study-calendar"
    assert "Formula review" in str(ev.get("DESCRIPTION"))


def test_long_session_is_clamped_with_warning() -> None:
    data, warnings = plan_to_ics([_event(4, "18:00 - 20:00")])
    assert len(warnings) == 1
    assert "Maths Paper 1" in warnings[0]
    (ev,) = _vevents(data)
    assert ev.get("DTEND").dt == datetime(2024, 1, 1, 20, 0)


def test_non_positive_duration_uses_whole_window() -> None:
    data, warnings = plan_to_ics([_event(0)])
    assert warnings == []
    (ev,) = _vevents(data)
    assert ev.get("DTEND").dt == datetime(2024, 1, 1, 17, 0)


def test_empty_plan_is_a_valid_calendar() -> None:
    data, warnings = plan_to_ics([])
    assert warnings == []
    assert _vevents(data) == []
    assert b"BEGIN:VCALENDAR" in data
