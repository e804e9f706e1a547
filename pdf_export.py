from __future__ import annotations
from datetime import date
from io import BytesIO
from typing import Dict, List, Tuple
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from models import Preferences, StudyEvent, Weekday
from planner import plan_horizon_end


def _preferences_summary(preferences: Preferences) -> List[str]:
    windows = [
        f"{day.value[:3]} {preferences.availability[day].window}"
        for day in Weekday
        if day in preferences.availability
    ]
    return [
        f"Subjects: {', '.join(preferences.subjects) or 'None'}",
        f"Daily study: {preferences.study_duration}h | Blocked dates: {len(preferences.unavailable_dates)}",
        f"Weekly availability: {'; '.join(windows) or 'None'}",
    ]


def study_plan_to_pdf(
    events: List[StudyEvent],
    preferences: Preferences,
    start_date: date,
) -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=40,
        rightMargin=40,
        topMargin=40,
        bottomMargin=40,
    )
    styles = getSampleStyleSheet()
    elems = []

    end_date = plan_horizon_end(start_date)
    elems.append(Paragraph(f"Study Plan: {start_date.isoformat()} - {end_date.isoformat()}", styles["Title"]))
    elems.append(Spacer(1, 10))
    for line in _preferences_summary(preferences):
        elems.append(Paragraph(line, styles["Normal"]))
    elems.append(Spacer(1, 12))

    if not events:
        elems.append(Paragraph("No study sessions in this plan.", styles["Normal"]))
        doc.build(elems)
        return buf.getvalue()

    by_month: Dict[Tuple[int, int], List[StudyEvent]] = {}
    for ev in events:
        by_month.setdefault((ev.day.year, ev.day.month), []).append(ev)

    for year, month in sorted(by_month.keys()):
        elems.append(Paragraph(date(year, month, 1).strftime("%B %Y"), styles["Heading3"]))
        table_data = [["Date", "Day", "Subject", "Time", "Hours", "Tasks"]]
        for ev in sorted(by_month[(year, month)], key=lambda x: x.day):
            table_data.append([
                ev.day.isoformat(),
                ev.day.strftime("%a"),
                ev.subject,
                ev.time_window,
                str(ev.duration),
                ", ".join(ev.tasks),
            ])

        table = Table(table_data, hAlign="LEFT", colWidths=[65, 35, 100, 80, 40, 210])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ("ALIGN", (4, 1), (4, -1), "RIGHT"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
        ]))
        elems.append(table)
        elems.append(Spacer(1, 8))

    doc.build(elems)
    return buf.getvalue()
