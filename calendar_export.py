from __future__ import annotations
from datetime import datetime, time, timedelta
from typing import List, Tuple
from icalendar import Calendar, Event as IcsEvent
from models import StudyEvent


def parse_time_window(window: str) -> Tuple[time, time]:
    """Parse a "HH:MM - HH:MM" window string."""
    start_text, end_text = (part.strip() for part in window.split("-", 1))
    start = datetime.strptime(start_text, "%H:%M").time()
    end = datetime.strptime(end_text, "%H:%M").time()
    return start, end


def plan_to_ics(events: List[StudyEvent]) -> Tuple[bytes, List[str]]:
    cal = Calendar()
    cal.add("PRODID", "-//Study Calendar//Local//")
    cal.add("version", "2.0")
    cal.add("X-WR-CALNAME", "Study Plan")

    warnings: List[str] = []
    for ev in events:
        start_t, end_t = parse_time_window(ev.time_window)
        # Floating local times; the window is wall-clock time wherever the user is.
        window_start = datetime.combine(ev.day, start_t)
        window_end = datetime.combine(ev.day, end_t)

        if ev.duration > 0:
            end = window_start + timedelta(hours=ev.duration)
            if end > window_end:
                warnings.append(
                    f"{ev.day.isoformat()}: {ev.duration}h of {ev.subject} does not fit in {ev.time_window}."
                )
                end = window_end
        else:
            end = window_end

        item = IcsEvent()
        item.add("uid", f"{ev.id}@study-calendar")
        item.add("summary", f"Study: {ev.subject}")
        item.add("dtstart", window_start)
        item.add("dtend", end)
        item.add("dtstamp", window_start)
        if ev.tasks:
            item.add("description", "\n".join(f"- {t}" for t in ev.tasks))
        cal.add_component(item)

    return cal.to_ical(), warnings
