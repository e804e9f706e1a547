from __future__ import annotations
from datetime import date
from typing import Dict, List, Tuple
from errors import PreconditionViolation
from models import LearningStyleResult

STYLES = ["visual", "auditory", "kinesthetic", "reading_writing"]

# (question, [(style, option text), ...])
QUESTIONS: List[Tuple[str, List[Tuple[str, str]]]] = [
    ("When you need to learn something new, what helps you most?", [
        ("visual", "Seeing diagrams, charts, or visual examples"),
        ("auditory", "Listening to explanations or discussing with others"),
        ("kinesthetic", "Hands-on practice and trying it yourself"),
        ("reading_writing", "Reading detailed notes and writing summaries"),
    ]),
    ("In a classroom, you prefer when the teacher:", [
        ("visual", "Uses slides, drawings, and visual aids"),
        ("auditory", "Explains concepts verbally and encourages discussion"),
        ("kinesthetic", "Includes activities and hands-on experiments"),
        ("reading_writing", "Provides detailed handouts and written materials"),
    ]),
    ("When studying for an exam, you're most likely to:", [
        ("visual", "Create mind maps, flashcards, or colorful notes"),
        ("auditory", "Read aloud, discuss with friends, or listen to recordings"),
        ("kinesthetic", "Use practice tests, role-play, or take frequent breaks to move"),
        ("reading_writing", "Write detailed notes, outlines, and practice essays"),
    ]),
    ("You remember information best when:", [
        ("visual", "You can picture it or see it written down"),
        ("auditory", "You hear it or say it out loud"),
        ("kinesthetic", "You practice it or experience it physically"),
        ("reading_writing", "You write it down and read it multiple times"),
    ]),
    ("When following directions, you prefer:", [
        ("visual", "Maps, diagrams, or step-by-step visual guides"),
        ("auditory", "Spoken instructions or asking someone to explain"),
        ("kinesthetic", "Learning by doing and figuring it out as you go"),
        ("reading_writing", "Written instructions that you can refer to"),
    ]),
]

STYLE_INFO: Dict[str, dict] = {
    "visual": {
        "title": "Visual Learner",
        "description": "You learn best through seeing and visualizing information.",
        "tips": [
            "Use colorful notes, highlighters, and mind maps",
            "Create diagrams and flowcharts for complex topics",
            "Watch educational videos and use visual aids",
            "Organize information with charts and graphs",
        ],
    },
    "auditory": {
        "title": "Auditory Learner",
        "description": "You learn best through hearing and speaking.",
        "tips": [
            "Read aloud and discuss concepts with others",
            "Listen to podcasts and audio recordings",
            "Participate in study groups and verbal discussions",
            "Use rhymes and songs to memorize information",
        ],
    },
    "kinesthetic": {
        "title": "Kinesthetic Learner",
        "description": "You learn best through hands-on activities and movement.",
        "tips": [
            "Use hands-on experiments and practical applications",
            "Take frequent breaks and incorporate movement",
            "Use manipulatives and physical models",
            "Practice skills in real-world contexts",
        ],
    },
    "reading_writing": {
        "title": "Reading/Writing Learner",
        "description": "You learn best through reading and writing activities.",
        "tips": [
            "Take detailed notes and create outlines",
            "Read extensively and write summaries",
            "Use lists, definitions, and written exercises",
            "Rewrite information in your own words",
        ],
    },
}


def style_label(style: str) -> str:
    return style.replace("_", "/")


def score_assessment(answers: List[str], today: date) -> LearningStyleResult:
    """
    Count one vote per answered question. On a tie the style listed
    later in STYLES wins.
    """
    if len(answers) != len(QUESTIONS):
        raise PreconditionViolation(
            f"Answer all {len(QUESTIONS)} questions before scoring ({len(answers)} answered)."
        )

    counts = {style: 0 for style in STYLES}
    for answer in answers:
        if answer not in counts:
            raise ValueError(f"Unknown learning style {answer!r}.")
        counts[answer] += 1

    dominant = STYLES[0]
    for style in STYLES[1:]:
        if counts[style] >= counts[dominant]:
            dominant = style

    total = len(answers)
    percentages = {style: int(counts[style] * 100 / total + 0.5) for style in STYLES}
    return LearningStyleResult(
        dominant_style=dominant,
        style_percentages=percentages,
        raw_counts=counts,
        total_questions=total,
        assessed_on=today,
    )
