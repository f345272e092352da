"""Weighted candidate scoring engine.

This module provides:
- CandidateMatcher: Service that scores and ranks candidates against SearchCriteria
- MatchResult / DimensionScore: Score of one candidate with per-dimension breakdown
- FieldMatcher and the per-dimension matchers used by the weight table
- Helpers for building presentation payloads and rationale summaries
"""

from .engine import CandidateMatcher, compute_percentage
from .models import DimensionScore, MatchResult, classify_score
from .predicates import (
    DIMENSIONS,
    FieldMatcher,
    check_education_match,
    check_experience_match,
    count_matching_skills,
    skill_matches,
)
from .utils import build_rationale_dict, build_result_payload, experience_text

__all__ = [
    "CandidateMatcher",
    "compute_percentage",
    "MatchResult",
    "DimensionScore",
    "classify_score",
    "DIMENSIONS",
    "FieldMatcher",
    "check_experience_match",
    "check_education_match",
    "count_matching_skills",
    "skill_matches",
    "build_result_payload",
    "build_rationale_dict",
    "experience_text",
]
