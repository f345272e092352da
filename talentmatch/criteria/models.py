"""Canonical search criteria passed from the normalizer to the matcher."""

from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, Field

from talentmatch.domain.models import EducationLevel, ExperienceLevel, JobType, WorkType

DEFAULT_SALARY_RANGE: Tuple[float, float] = (0, 100000)

# Scoring dimensions in weight-table order; names match ScoringWeights fields
DIMENSION_NAMES: Tuple[str, ...] = (
    "skills",
    "experience",
    "work_type",
    "job_type",
    "location",
    "education",
    "availability",
    "salary",
)


class SearchCriteria(BaseModel):
    """Immutable, normalized criteria for one search request.

    Every set-valued criterion is inactive when empty. ``availability`` is
    inactive when None and ``salary_range`` is inactive while it equals
    ``salary_default`` (the "unconstrained" sentinel).
    """

    skills: FrozenSet[str] = Field(default_factory=frozenset)
    locations: FrozenSet[str] = Field(default_factory=frozenset)
    experience_levels: FrozenSet[ExperienceLevel] = Field(default_factory=frozenset)
    work_types: FrozenSet[WorkType] = Field(default_factory=frozenset)
    job_types: FrozenSet[JobType] = Field(default_factory=frozenset)
    education_levels: FrozenSet[EducationLevel] = Field(default_factory=frozenset)
    availability: Optional[str] = None
    salary_range: Tuple[float, float] = DEFAULT_SALARY_RANGE
    search_text: Optional[str] = Field(
        None, description="Free-text query; forwarded to the repository, never scored"
    )
    salary_default: Tuple[float, float] = Field(DEFAULT_SALARY_RANGE, exclude=True)

    model_config = {"frozen": True}

    @property
    def salary_is_constrained(self) -> bool:
        """True when the salary range differs from the unconstrained default."""
        return tuple(self.salary_range) != tuple(self.salary_default)

    def is_active(self, dimension: str) -> bool:
        """Whether the named scoring dimension contributes to the score.

        Raises:
            KeyError: If the dimension name is unknown
        """
        checks = {
            "skills": bool(self.skills),
            "experience": bool(self.experience_levels),
            "work_type": bool(self.work_types),
            "job_type": bool(self.job_types),
            "location": bool(self.locations),
            "education": bool(self.education_levels),
            "availability": self.availability is not None,
            "salary": self.salary_is_constrained,
        }
        return checks[dimension]

    def active_dimensions(self) -> List[str]:
        """Names of active dimensions in weight-table order."""
        return [name for name in DIMENSION_NAMES if self.is_active(name)]

    @property
    def has_active_criteria(self) -> bool:
        return bool(self.active_dimensions())

    def to_raw(self) -> Dict[str, Any]:
        """Render back to the camelCase filter payload shape.

        Only active criteria are emitted, mirroring what the search client
        sends, so ``normalize(criteria.to_raw())`` reproduces the criteria.
        """
        raw: Dict[str, Any] = {}
        if self.search_text:
            raw["searchText"] = self.search_text
        if self.skills:
            raw["skills"] = sorted(self.skills)
        if self.locations:
            raw["locations"] = sorted(self.locations)
        if self.experience_levels:
            raw["experience"] = sorted(level.value for level in self.experience_levels)
        if self.work_types:
            raw["workType"] = sorted(work_type.value for work_type in self.work_types)
        if self.job_types:
            raw["jobType"] = sorted(job_type.value for job_type in self.job_types)
        if self.salary_is_constrained:
            raw["salaryRange"] = list(self.salary_range)
        if self.education_levels:
            raw["education"] = sorted(level.value for level in self.education_levels)
        if self.availability is not None:
            raw["availability"] = self.availability
        return raw
