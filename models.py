from __future__ import annotations
from datetime import date, time
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from errors import InvalidRange


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def of(cls, d: date) -> "Weekday":
        return list(cls)[d.weekday()]


DEFAULT_START = time(9, 0)
DEFAULT_END = time(17, 0)


class AvailabilitySlot(BaseModel):
    day: Weekday
    start: time = DEFAULT_START
    end: time = DEFAULT_END

    @model_validator(mode="after")
    def _check_range(self) -> "AvailabilitySlot":
        if self.start >= self.end:
            raise ValueError(f"{self.day.value}: start must be before end")
        return self

    @property
    def window(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


def _default_availability() -> Dict[Weekday, AvailabilitySlot]:
    weekdays = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]
    return {d: AvailabilitySlot(day=d) for d in weekdays}


def _default_subjects() -> List[str]:
    return ["English Paper 1", "Maths Paper 1"]


class Preferences(BaseModel):
    """
    Study preferences edited by the user before a plan is generated.
    Availability is keyed by weekday, so a day has at most one window.
    Blocked dates always win over weekday availability.
    """
    unavailable_dates: List[date] = Field(default_factory=list)
    availability: Dict[Weekday, AvailabilitySlot] = Field(default_factory=_default_availability)
    study_duration: int = 2  # hours per day
    subjects: List[str] = Field(default_factory=_default_subjects)

    @model_validator(mode="after")
    def _check_slot_keys(self) -> "Preferences":
        for day, slot in self.availability.items():
            if slot.day != day:
                raise ValueError(f"slot for {slot.day.value} stored under {day.value}")
        return self

    def add_unavailable_date(self, d: date) -> None:
        if d not in self.unavailable_dates:
            self.unavailable_dates.append(d)

    def remove_unavailable_date(self, d: date) -> None:
        self.unavailable_dates = [x for x in self.unavailable_dates if x != d]

    def is_date_blocked(self, d: date) -> bool:
        return d in self.unavailable_dates

    def slot_for(self, weekday: Weekday) -> Optional[AvailabilitySlot]:
        return self.availability.get(weekday)

    def set_availability(self, weekday: Weekday, start: time, end: time) -> None:
        # Only updates an existing slot; enabling a day is toggle_weekday_availability's job.
        if start >= end:
            raise InvalidRange(
                f"{weekday.value}: {start:%H:%M} is not before {end:%H:%M}"
            )
        if weekday in self.availability:
            self.availability[weekday] = AvailabilitySlot(day=weekday, start=start, end=end)

    def toggle_weekday_availability(self, weekday: Weekday, enabled: bool) -> None:
        if enabled:
            if weekday not in self.availability:
                self.availability[weekday] = AvailabilitySlot(day=weekday)
        else:
            self.availability.pop(weekday, None)

    def add_subject(self, name: str) -> None:
        name = name.strip()
        if name and name not in self.subjects:
            self.subjects.append(name)

    def remove_subject(self, name: str) -> None:
        self.subjects = [s for s in self.subjects if s != name]

    def set_daily_duration(self, hours: int) -> None:
        self.study_duration = int(hours)

    def can_generate(self) -> bool:
        return bool(self.subjects) and bool(self.availability)


class StudyEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    day: date
    subject: str
    tasks: Tuple[str, ...] = ()
    time_window: str
    duration: int  # hours


class Exam(BaseModel):
    id: str
    subject: str
    day: date
    kind: str = ""  # e.g. "Paper 1", "Mock"
    priority: Literal["high", "medium", "low"] = "medium"
    study_progress: int = Field(default=0, ge=0, le=100)


class LearningStyleResult(BaseModel):
    dominant_style: str
    style_percentages: Dict[str, int]
    raw_counts: Dict[str, int]
    total_questions: int
    assessed_on: date


class ProfileState(BaseModel):
    """Everything saved for one profile. The generated plan is never stored."""
    preferences: Preferences = Field(default_factory=Preferences)
    exams: List[Exam] = Field(default_factory=list)
    learning_style: Optional[LearningStyleResult] = None
