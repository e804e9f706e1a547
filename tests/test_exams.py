"""Tests for exams."""
from datetime import date

import pytest

from exams import (
    average_progress,
    countdown_label,
    days_until,
    new_exam,
    next_exam,
    remove_exam,
    set_progress,
    sort_exams,
    upcoming_exams,
)

TODAY = date(2024, 5, 10)


def test_new_exam_strips_and_validates() -> None:
    exam = new_exam("  Biology ", date(2024, 6, 1), " Mock ", "high")
    assert exam.subject == "Biology"
    assert exam.kind == "Mock"
    assert exam.priority == "high"
    assert exam.study_progress == 0
    assert exam.id

    with pytest.raises(ValueError):
        new_exam("   ", date(2024, 6, 1))
    with pytest.raises(ValueError):
        new_exam("Biology", date(2024, 6, 1), priority="urgent")


def test_exams_sort_by_date_ascending() -> None:
    late = new_exam("History", date(2024, 6, 20))
    early = new_exam("Maths Paper 1", date(2024, 5, 14))
    same_day = new_exam("English Paper 1", date(2024, 5, 14))
    assert [e.subject for e in sort_exams([late, early, same_day])] == [
        "English Paper 1", "Maths Paper 1", "History",
    ]


def test_countdowns() -> None:
    exam = new_exam("Physics", date(2024, 5, 16))
    assert days_until(exam, TODAY) == 6
    assert countdown_label(6) == "6 days"
    assert countdown_label(1) == "Tomorrow"
    assert countdown_label(0) == "Today"
    assert countdown_label(-3) == "3 days ago"


def test_upcoming_and_next_exam_skip_past_dates() -> None:
    past = new_exam("Art", date(2024, 5, 1))
    today = new_exam("Music", TODAY)
    later = new_exam("Drama", date(2024, 7, 1))
    assert upcoming_exams([later, past, today], TODAY) == [today, later]
    assert next_exam([later, past], TODAY) == later
    assert next_exam([past], TODAY) is None


def test_progress_updates_and_average() -> None:
    a = new_exam("Art", date(2024, 6, 1))
    b = new_exam("Music", date(2024, 6, 2))
    assert average_progress([]) == 0
    set_progress(a, 50)
    set_progress(b, 25)
    assert average_progress([a, b]) == 38
    with pytest.raises(ValueError):
        set_progress(a, 101)
    assert a.study_progress == 50


def test_remove_exam() -> None:
    a = new_exam("Art", date(2024, 6, 1))
    b = new_exam("Music", date(2024, 6, 2))
    assert remove_exam([a, b], a.id) == [b]
    assert remove_exam([a, b], "missing") == [a, b]
