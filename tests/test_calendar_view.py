"""Tests for calendar_view."""
from datetime import date

from calendar_view import REASON_OVERRIDE, REASON_WEEKDAY, CalendarView
from models import Preferences, StudyEvent
from planner import generate_study_plan


def _event(d: date, n: int, subject: str = "Math") -> StudyEvent:
    return StudyEvent(
        id=f"study-{d.isoformat()}-{n}",
        day=d,
        subject=subject,
        tasks=(),
        time_window="09:00 - 17:00",
        duration=2,
    )


def test_unavailable_reasons() -> None:
    prefs = Preferences(unavailable_dates=[date(2024, 1, 2)])
    view = CalendarView(prefs, [])
    assert view.unavailable_reason(date(2024, 1, 2)) == REASON_OVERRIDE
    assert view.unavailable_reason(date(2024, 1, 6)) == REASON_WEEKDAY
    assert view.unavailable_reason(date(2024, 1, 3)) is None
    assert view.is_unavailable(date(2024, 1, 2))
    assert view.is_unavailable(date(2024, 1, 7))
    assert not view.is_unavailable(date(2024, 1, 4))


def test_override_reason_wins_on_unscheduled_weekday() -> None:
    prefs = Preferences(unavailable_dates=[date(2024, 1, 6)])
    view = CalendarView(prefs, [])
    assert view.unavailable_reason(date(2024, 1, 6)) == REASON_OVERRIDE


def test_events_for_date_returns_all_matches() -> None:
    d = date(2024, 1, 3)
    events = [_event(d, 0), _event(d, 1, "English"), _event(date(2024, 1, 4), 2)]
    view = CalendarView(Preferences(), events)
    assert [ev.subject for ev in view.events_for_date(d)] == ["Math", "English"]
    assert view.events_for_date(date(2024, 1, 5)) == []


def test_month_grid_is_sunday_aligned() -> None:
    prefs = Preferences()
    view = CalendarView(prefs, generate_study_plan(prefs, date(2024, 1, 1)))

    # January 2024 starts on a Monday
    cells = view.month_grid(2024, 1)
    assert cells[0].day is None
    assert cells[1].day == date(2024, 1, 1)
    assert len(cells) == 1 + 31

    # September 2024 starts on a Sunday
    assert view.month_grid(2024, 9)[0].day == date(2024, 9, 1)

    # June 2024 starts on a Saturday
    june = view.month_grid(2024, 6)
    assert all(c.day is None for c in june[:6])
    assert june[6].day == date(2024, 6, 1)


def test_month_grid_cells_carry_events_and_flags() -> None:
    prefs = Preferences(subjects=["Math", "English"])
    prefs.add_unavailable_date(date(2024, 1, 3))
    view = CalendarView(prefs, generate_study_plan(prefs, date(2024, 1, 1)))
    by_day = {c.day: c for c in view.month_grid(2024, 1) if c.day}

    assert [ev.subject for ev in by_day[date(2024, 1, 2)].events] == ["English"]
    assert not by_day[date(2024, 1, 2)].unavailable

    blocked = by_day[date(2024, 1, 3)]
    assert blocked.unavailable and blocked.reason == REASON_OVERRIDE
    assert blocked.events == []

    weekend = by_day[date(2024, 1, 6)]
    assert weekend.unavailable and weekend.reason == REASON_WEEKDAY


def test_month_grid_caps_events_per_cell() -> None:
    d = date(2024, 1, 10)
    events = [_event(d, n) for n in range(5)]
    cell = next(c for c in CalendarView(Preferences(), events).month_grid(2024, 1) if c.day == d)
    assert len(cell.events) == 2
    assert cell.overflow == 3


def test_weeks_are_full_rows() -> None:
    weeks = CalendarView(Preferences(), []).weeks(2024, 1)
    assert len(weeks) == 5
    assert all(len(w) == 7 for w in weeks)
    assert weeks[-1][-1].day is None
    assert weeks[-1][3].day == date(2024, 1, 31)
