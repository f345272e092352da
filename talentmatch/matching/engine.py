"""Weighted scoring engine for ranking candidates against search criteria.

This module implements the scoring logic that:
1. Evaluates each active dimension of SearchCriteria for a candidate
2. Adds the dimension weight to the maximum possible score
3. Adds the earned share of that weight to the candidate's total
4. Converts total / maximum into a 0-100 percentage
5. Ranks scored candidates by descending score
"""

import contextvars
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Sequence, Union

from talentmatch.config.models import ScoringWeights
from talentmatch.criteria.models import SearchCriteria
from talentmatch.domain.models import CandidateRecord

from .models import DimensionScore, MatchResult
from .predicates import DIMENSIONS, FieldMatcher

logger = logging.getLogger(__name__)

CandidateInput = Union[CandidateRecord, Mapping[str, Any]]


def compute_percentage(total: float, max_possible: float) -> int:
    """Convert earned points into a 0-100 integer score.

    Rounds half up and returns 0 when no dimension was active.

    Example:
        >>> compute_percentage(65, 65)
        100
        >>> compute_percentage(0, 0)
        0
    """
    if max_possible <= 0:
        return 0
    percentage = total / max_possible * 100
    return max(0, min(int(math.floor(percentage + 0.5)), 100))


class CandidateMatcher:
    """Scores candidates against normalized search criteria.

    Responsibilities:
    - Score each active dimension with its FieldMatcher
    - Give fractional credit for skills, all-or-nothing for other dimensions
    - Never exclude a candidate: poor matches are ranked lower, not dropped
    - Rank results by descending score, keeping input order for ties
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        dimensions: Sequence[FieldMatcher] = DIMENSIONS,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize CandidateMatcher.

        Args:
            weights: Point value per dimension (defaults to ScoringWeights())
            dimensions: FieldMatchers to evaluate, in weight-table order
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.weights = weights or ScoringWeights()
        self.dimensions = tuple(dimensions)
        self.logger = logger_instance or logger
        self._weight_table = self.weights.as_dict()

    def score(self, criteria: SearchCriteria, candidate: CandidateInput) -> MatchResult:
        """Score a single candidate.

        Args:
            criteria: Normalized search criteria
            candidate: CandidateRecord, or a raw resume document

        Returns:
            MatchResult with score, totals and per-dimension breakdown
        """
        if not isinstance(candidate, CandidateRecord):
            candidate = CandidateRecord.from_document(candidate)

        total = 0.0
        max_possible = 0.0
        breakdown: List[DimensionScore] = []

        for matcher in self.dimensions:
            if not criteria.is_active(matcher.name):
                continue

            weight = self._weight_table.get(matcher.name, 0)
            fraction = matcher.fraction(criteria, candidate)
            earned = weight * fraction

            total += earned
            max_possible += weight
            breakdown.append(
                DimensionScore(name=matcher.name, weight=weight, earned=earned, fraction=fraction)
            )

        score = compute_percentage(total, max_possible)

        self.logger.debug(
            f"Candidate scored: {candidate.candidate_id}",
            extra={
                "event": "matching.candidate.scored",
                "candidate_id": candidate.candidate_id,
                "score": score,
                "total": round(total, 2),
                "max_possible": max_possible,
                "matched_dimensions": [d.name for d in breakdown if d.matched],
            },
        )

        return MatchResult(
            candidate_id=candidate.candidate_id,
            score=score,
            passes_filters=True,
            total=total,
            max_possible=max_possible,
            dimensions=breakdown,
        )

    def score_all(
        self,
        criteria: SearchCriteria,
        candidates: Sequence[CandidateRecord],
        max_workers: int = 1,
    ) -> List[MatchResult]:
        """Score a batch of candidates, preserving input order.

        Scoring is independent per candidate, so with max_workers > 1 the
        batch is spread over a thread pool; results still come back in the
        order of ``candidates``. Each task runs in a copy of the caller's
        context so the log context (search_id, ...) reaches worker threads.
        """
        if max_workers <= 1 or len(candidates) < 2:
            return [self.score(criteria, candidate) for candidate in candidates]

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="talentmatch-score") as pool:
            futures = [
                pool.submit(contextvars.copy_context().run, self.score, criteria, candidate)
                for candidate in candidates
            ]
            return [future.result() for future in futures]

    @staticmethod
    def rank(results: Sequence[MatchResult]) -> List[MatchResult]:
        """Sort by descending score; ties keep their original relative order."""
        return sorted(results, key=lambda result: result.score, reverse=True)
