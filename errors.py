from __future__ import annotations


class StudyPlanError(Exception):
    """Base class for study plan errors."""


class PreconditionViolation(StudyPlanError, ValueError):
    """Raised when a plan is requested from preferences that cannot produce one."""


class InvalidRange(StudyPlanError, ValueError):
    """Raised when a weekly window does not start before it ends."""
