from __future__ import annotations
import logging
from datetime import date, timedelta
from typing import Dict, List, Tuple
import pandas as pd
from errors import PreconditionViolation
from models import Preferences, StudyEvent, Weekday

logger = logging.getLogger(__name__)

HORIZON_MONTHS = 3
MAX_TASKS_PER_SESSION = 2

TASKS_BY_KIND: Dict[str, Tuple[str, ...]] = {
    "english": ("Reading comprehension practice", "Essay writing", "Grammar review"),
    "math": ("Problem solving practice", "Formula review", "Past paper questions"),
    "general": ("Review notes", "Practice questions", "Summary writing"),
}


def _subject_kind(subject: str) -> str:
    if "English" in subject:
        return "english"
    if "Math" in subject:  # also matches "Maths"
        return "math"
    return "general"


def tasks_for_subject(subject: str) -> Tuple[str, ...]:
    return TASKS_BY_KIND[_subject_kind(subject)][:MAX_TASKS_PER_SESSION]


def plan_horizon_end(start_date: date) -> date:
    """
    Same day-of-month HORIZON_MONTHS later. When the target month is too
    short the extra days roll into the next month (Nov 30 -> Mar 1 in a
    leap year, Mar 2 otherwise).
    """
    first_of_target = pd.Timestamp(start_date) + pd.DateOffset(months=HORIZON_MONTHS, day=1)
    end = first_of_target + pd.Timedelta(days=start_date.day - 1)
    return end.date()


def generate_study_plan(preferences: Preferences, start_date: date) -> List[StudyEvent]:
    """
    Walk every date from start_date to plan_horizon_end(start_date) inclusive
    and give each available day the next subject in rotation. Blocked dates
    and unscheduled weekdays are skipped without consuming a rotation slot.
    """
    subjects = list(preferences.subjects)
    if not subjects:
        raise PreconditionViolation("Add at least one subject before generating a plan.")

    end_date = plan_horizon_end(start_date)
    blocked = set(preferences.unavailable_dates)
    events: List[StudyEvent] = []
    rotation = 0

    d = start_date
    while d <= end_date:
        slot = preferences.slot_for(Weekday.of(d))
        if d not in blocked and slot is not None:
            subject = subjects[rotation % len(subjects)]
            events.append(StudyEvent(
                id=f"study-{d.isoformat()}-{rotation}",
                day=d,
                subject=subject,
                tasks=tasks_for_subject(subject),
                time_window=slot.window,
                duration=preferences.study_duration,
            ))
            rotation += 1
        d = d + timedelta(days=1)

    logger.info(
        "Generated %d study sessions from %s to %s across %d subjects",
        len(events), start_date.isoformat(), end_date.isoformat(), len(subjects),
    )
    return events
