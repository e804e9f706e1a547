"""Tests for pdf_export."""
from datetime import date

from models import Preferences
from pdf_export import study_plan_to_pdf
from planner import generate_study_plan


def test_pdf_for_generated_plan() -> None:
    prefs = Preferences()
    start = date(2024, 1, 1)
    data = study_plan_to_pdf(generate_study_plan(prefs, start), prefs, start)
    assert data.startswith(b"%PDF")


def test_pdf_for_empty_plan() -> None:
    prefs = Preferences(availability={})
    data = study_plan_to_pdf([], prefs, date(2024, 1, 1))
    assert data.startswith(b"%PDF")
