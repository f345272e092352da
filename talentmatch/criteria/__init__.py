"""Search criteria normalization.

This module provides:
- SearchCriteria: Immutable canonical criteria for one search request
- CriteriaNormalizer: Service that coerces raw filter payloads into SearchCriteria
- merge_job_criteria: Helper combining a saved job's requirements with user filters
"""

from .models import DEFAULT_SALARY_RANGE, DIMENSION_NAMES, SearchCriteria
from .normalizer import CriteriaNormalizer, merge_job_criteria, normalize_criteria

__all__ = [
    "SearchCriteria",
    "CriteriaNormalizer",
    "merge_job_criteria",
    "normalize_criteria",
    "DEFAULT_SALARY_RANGE",
    "DIMENSION_NAMES",
]
