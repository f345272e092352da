"""Per-dimension match predicates.

Each scoring dimension has a FieldMatcher that decides how much of the
dimension's weight a candidate earns (a fraction between 0 and 1). Only the
skills dimension gives partial credit; every other dimension is all or
nothing. The string heuristics here (substring skill matching, regex degree
detection) are intentionally loose and can produce false positives, e.g.
"be" inside "bachelor of fine arts" or "me" inside "mechanical".
"""

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from talentmatch.criteria.models import SearchCriteria
from talentmatch.domain.models import CandidateRecord, EducationEntry, EducationLevel, ExperienceLevel

# (lower bound, lower bound inclusive, upper bound) with the upper bound inclusive
EXPERIENCE_BANDS: Dict[ExperienceLevel, Tuple[float, bool, float]] = {
    ExperienceLevel.ENTRY: (0, True, 2),
    ExperienceLevel.MID: (2, False, 5),
    ExperienceLevel.SENIOR: (5, False, 10),
    ExperienceLevel.EXEC: (10, False, math.inf),
}

EDUCATION_PATTERNS: Dict[EducationLevel, re.Pattern] = {
    EducationLevel.HIGHSCHOOL: re.compile(r"high school|secondary"),
    EducationLevel.ASSOCIATE: re.compile(r"associate"),
    EducationLevel.BACHELOR: re.compile(r"bachelor|b\.?tech|b\.?e|b\.?sc"),
    EducationLevel.MASTER: re.compile(r"master|m\.?tech|m\.?e|m\.?sc"),
    EducationLevel.PHD: re.compile(r"ph\.?d|doctorate"),
}


def years_in_band(years: float, level: ExperienceLevel) -> bool:
    """Check whether a number of years falls inside one experience band."""
    lower, lower_inclusive, upper = EXPERIENCE_BANDS[ExperienceLevel(level)]
    above_lower = years >= lower if lower_inclusive else years > lower
    return above_lower and years <= upper


def check_experience_match(years: Optional[float], levels: Iterable[ExperienceLevel]) -> bool:
    """True if the candidate's years fall in ANY requested band.

    Bands: entry [0, 2], mid (2, 5], senior (5, 10], exec (10, inf).
    Missing years count as 0.

    Example:
        >>> check_experience_match(2, [ExperienceLevel.MID])
        False
        >>> check_experience_match(2.01, [ExperienceLevel.MID])
        True
    """
    years = years or 0
    return any(years_in_band(years, level) for level in levels)


def _degree_text(entry: Any) -> str:
    if isinstance(entry, EducationEntry):
        return entry.degree.lower()
    if isinstance(entry, Mapping):
        degree = entry.get("degree")
        return degree.lower() if isinstance(degree, str) else ""
    if isinstance(entry, str):
        return entry.lower()
    return ""


def check_education_match(entries: Iterable[Any], levels: Iterable[EducationLevel]) -> bool:
    """True if ANY requested level's pattern matches ANY candidate degree.

    Degrees are lower-cased and searched (not fully matched) with the
    patterns in EDUCATION_PATTERNS.
    """
    degrees = [_degree_text(entry) for entry in entries or []]
    degrees = [degree for degree in degrees if degree]
    if not degrees:
        return False

    for level in levels:
        pattern = EDUCATION_PATTERNS.get(EducationLevel(level))
        if pattern and any(pattern.search(degree) for degree in degrees):
            return True
    return False


def skill_matches(required: str, candidate_skill: str) -> bool:
    """Case-insensitive substring match in either direction."""
    required = required.lower()
    candidate_skill = candidate_skill.lower()
    if not required or not candidate_skill:
        return False
    return required in candidate_skill or candidate_skill in required


def count_matching_skills(required: Iterable[str], candidate_skills: Iterable[str]) -> int:
    """Number of required skills covered by at least one candidate skill."""
    candidate_skills = list(candidate_skills)
    return sum(
        1 for skill in required
        if any(skill_matches(skill, candidate_skill) for candidate_skill in candidate_skills)
    )


class FieldMatcher(ABC):
    """Match predicate for one scoring dimension.

    Subclasses implement matches(); fractional dimensions also override
    fraction().
    """

    name: str = ""

    @abstractmethod
    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        """Whether the candidate satisfies this dimension's criterion."""

    def fraction(self, criteria: SearchCriteria, candidate: CandidateRecord) -> float:
        """Share of the dimension weight earned, between 0 and 1."""
        return 1.0 if self.matches(criteria, candidate) else 0.0


class SkillsMatcher(FieldMatcher):
    name = "skills"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        return self.fraction(criteria, candidate) > 0

    def fraction(self, criteria: SearchCriteria, candidate: CandidateRecord) -> float:
        if not criteria.skills:
            return 0.0
        matched = count_matching_skills(criteria.skills, candidate.skills)
        return matched / len(criteria.skills)


class ExperienceMatcher(FieldMatcher):
    name = "experience"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        return check_experience_match(candidate.total_experience_years, criteria.experience_levels)


class WorkTypeMatcher(FieldMatcher):
    name = "work_type"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        accepted = set(candidate.selected_work_types)
        return any(work_type.value in accepted for work_type in criteria.work_types)


class JobTypeMatcher(FieldMatcher):
    name = "job_type"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        return any(job_type.value == candidate.job_main_type for job_type in criteria.job_types)


class LocationMatcher(FieldMatcher):
    name = "location"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        candidate_locations = [candidate.location_text, *candidate.preferred_locations]
        candidate_locations = [loc.lower() for loc in candidate_locations if loc]
        return any(
            wanted.lower() in loc
            for wanted in criteria.locations
            for loc in candidate_locations
        )


class EducationMatcher(FieldMatcher):
    name = "education"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        return check_education_match(candidate.education_entries, criteria.education_levels)


class AvailabilityMatcher(FieldMatcher):
    name = "availability"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        return candidate.availability is not None and candidate.availability == criteria.availability


class SalaryMatcher(FieldMatcher):
    name = "salary"

    def matches(self, criteria: SearchCriteria, candidate: CandidateRecord) -> bool:
        low, high = criteria.salary_range
        return low <= candidate.min_annual_ctc <= high


# Weight-table order
DIMENSIONS: Tuple[FieldMatcher, ...] = (
    SkillsMatcher(),
    ExperienceMatcher(),
    WorkTypeMatcher(),
    JobTypeMatcher(),
    LocationMatcher(),
    EducationMatcher(),
    AvailabilityMatcher(),
    SalaryMatcher(),
)
