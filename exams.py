from __future__ import annotations
from datetime import date
from typing import List, Optional
from uuid import uuid4
from models import Exam

PRIORITIES = ["high", "medium", "low"]


def new_exam(subject: str, day: date, kind: str = "", priority: str = "medium") -> Exam:
    subject = subject.strip()
    if not subject:
        raise ValueError("Exam subject is required.")
    if priority not in PRIORITIES:
        raise ValueError(f"Unknown priority {priority!r}.")
    return Exam(id=str(uuid4()), subject=subject, day=day, kind=kind.strip(), priority=priority)


def sort_exams(exams: List[Exam]) -> List[Exam]:
    return sorted(exams, key=lambda e: (e.day, e.subject.lower()))


def remove_exam(exams: List[Exam], exam_id: str) -> List[Exam]:
    return [e for e in exams if e.id != exam_id]


def set_progress(exam: Exam, progress: int) -> None:
    progress = int(progress)
    if not 0 <= progress <= 100:
        raise ValueError("Study progress must be between 0 and 100.")
    exam.study_progress = progress


def days_until(exam: Exam, today: date) -> int:
    return (exam.day - today).days


def countdown_label(days: int) -> str:
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days < 0:
        return f"{-days} days ago"
    return f"{days} days"


def upcoming_exams(exams: List[Exam], today: date) -> List[Exam]:
    return [e for e in sort_exams(exams) if e.day >= today]


def next_exam(exams: List[Exam], today: date) -> Optional[Exam]:
    upcoming = upcoming_exams(exams, today)
    return upcoming[0] if upcoming else None


def average_progress(exams: List[Exam]) -> int:
    if not exams:
        return 0
    # half rounds up, like the dashboard percentage
    return int(sum(e.study_progress for e in exams) / len(exams) + 0.5)
