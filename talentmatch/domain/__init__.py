"""Domain models for talentmatch."""

from .models import (
    CandidateRecord,
    EducationEntry,
    EducationLevel,
    ExperienceLevel,
    JobType,
    WorkType,
)

__all__ = [
    "CandidateRecord",
    "EducationEntry",
    "EducationLevel",
    "ExperienceLevel",
    "JobType",
    "WorkType",
]
