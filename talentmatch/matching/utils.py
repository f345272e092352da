"""Helpers for presenting match results to the request layer."""

import math
from typing import Any, Dict, Optional

from talentmatch.domain.models import CandidateRecord

from .models import MatchResult


def experience_text(years: Optional[float]) -> str:
    """Human-readable experience label.

    Example:
        >>> experience_text(0.5)
        '6 months experience'
        >>> experience_text(1.5)
        '1.5 year experience'
        >>> experience_text(4)
        '4 years experience'
    """
    if not years:
        return "Experience not specified"

    rounded = math.floor(years * 10 + 0.5) / 10
    if rounded < 1:
        months = math.floor(years * 12 + 0.5)
        return f"{months} months experience"

    label = f"{rounded:g}"
    if rounded < 2:
        return f"{label} year experience"
    return f"{label} years experience"


def build_result_payload(candidate: CandidateRecord, match_result: MatchResult) -> Dict[str, Any]:
    """Build the presentation dict for one ranked candidate.

    Upstream pass-through fields come first so the scoring fields always win.

    Returns:
        Dict with the candidate's camelCase fields plus:
        - candidateId: Candidate identifier
        - score: 0-100 match percentage
        - matchClass: excellent / good / fair / poor
        - experienceText: Display label for total experience
    """
    fields = candidate.model_dump(by_alias=True, mode="json", exclude={"extra"})

    return {
        **candidate.extra,
        **fields,
        "candidateId": candidate.candidate_id,
        "score": match_result.score,
        "matchClass": match_result.match_class,
        "experienceText": experience_text(candidate.total_experience_years),
    }


def build_rationale_dict(match_result: MatchResult) -> Dict[str, Any]:
    """Summarize how a score was reached, for logs or a details panel.

    Returns:
        Dict with:
        - score / total / max_possible: Headline numbers
        - matched_dimensions / missed_dimensions: Names of active dimensions
        - dimensions: Mapping of dimension name to earned and weight
    """
    return {
        "candidate_id": match_result.candidate_id,
        "score": match_result.score,
        "match_class": match_result.match_class,
        "total": round(match_result.total, 2),
        "max_possible": match_result.max_possible,
        "matched_dimensions": match_result.matched_dimensions,
        "missed_dimensions": match_result.missed_dimensions,
        "dimensions": {
            d.name: {"earned": round(d.earned, 2), "weight": d.weight}
            for d in match_result.dimensions
        },
    }
