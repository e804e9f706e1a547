from __future__ import annotations
import logging
from datetime import date, datetime, timedelta
from typing import List, Set
from icalendar import Calendar

logger = logging.getLogger(__name__)


def _to_date_bounds(start, end) -> tuple[date, date]:
    """
    Return the first and last calendar date an event touches.
    All-day events use an exclusive DTEND; timed events ending exactly
    at midnight do not touch the following day.
    """
    start_dt = getattr(start, "dt", start)
    end_dt = getattr(end, "dt", end) if end is not None else None

    if isinstance(start_dt, datetime):
        if start_dt.tzinfo:
            start_dt = start_dt.astimezone().replace(tzinfo=None)
        first = start_dt.date()
        if not isinstance(end_dt, datetime):
            return first, first
        if end_dt.tzinfo:
            end_dt = end_dt.astimezone().replace(tzinfo=None)
        if end_dt <= start_dt:
            return first, first
        last = (end_dt - timedelta(microseconds=1)).date()
        return first, last

    first = start_dt
    if isinstance(end_dt, date) and not isinstance(end_dt, datetime) and end_dt > first:
        return first, end_dt - timedelta(days=1)
    return first, first


def parse_ics_unavailable_dates(data: bytes) -> List[date]:
    cal = Calendar.from_ical(data)
    out: Set[date] = set()

    for component in cal.walk():
        if component.name != "VEVENT":
            continue

        dtstart = component.get("DTSTART")
        if dtstart is None:
            logger.debug("Skipping event without DTSTART: %s", component.get("SUMMARY", "Untitled"))
            continue

        first, last = _to_date_bounds(dtstart, component.get("DTEND"))
        d = first
        while d <= last:
            out.add(d)
            d = d + timedelta(days=1)

    return sorted(out)
