from __future__ import annotations
import calendar
from datetime import date
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from models import Preferences, StudyEvent, Weekday

REASON_OVERRIDE = "explicit override"
REASON_WEEKDAY = "weekday not scheduled"
MAX_EVENTS_PER_CELL = 2


class DayCell(BaseModel):
    day: Optional[date] = None  # None for leading padding
    unavailable: bool = False
    reason: Optional[str] = None
    events: List[StudyEvent] = Field(default_factory=list)
    overflow: int = 0


class CalendarView:
    """Read-only month and date queries over a generated plan."""

    def __init__(self, preferences: Preferences, events: List[StudyEvent]):
        self.preferences = preferences
        self.events = events
        self._by_day: Dict[date, List[StudyEvent]] = {}
        for ev in events:
            self._by_day.setdefault(ev.day, []).append(ev)

    def events_for_date(self, d: date) -> List[StudyEvent]:
        return list(self._by_day.get(d, []))

    def unavailable_reason(self, d: date) -> Optional[str]:
        if self.preferences.is_date_blocked(d):
            return REASON_OVERRIDE
        if self.preferences.slot_for(Weekday.of(d)) is None:
            return REASON_WEEKDAY
        return None

    def is_unavailable(self, d: date) -> bool:
        return self.unavailable_reason(d) is not None

    def month_grid(self, year: int, month: int) -> List[DayCell]:
        first = date(year, month, 1)
        # Sunday-first columns: Mon=0 .. Sun=6 -> Sun=0 .. Sat=6
        padding = (first.weekday() + 1) % 7
        cells = [DayCell() for _ in range(padding)]

        days_in_month = calendar.monthrange(year, month)[1]
        for n in range(1, days_in_month + 1):
            d = date(year, month, n)
            reason = self.unavailable_reason(d)
            day_events = self.events_for_date(d)
            cells.append(DayCell(
                day=d,
                unavailable=reason is not None,
                reason=reason,
                events=day_events[:MAX_EVENTS_PER_CELL],
                overflow=max(0, len(day_events) - MAX_EVENTS_PER_CELL),
            ))
        return cells

    def weeks(self, year: int, month: int) -> List[List[DayCell]]:
        cells = self.month_grid(year, month)
        while len(cells) % 7:
            cells.append(DayCell())
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]
