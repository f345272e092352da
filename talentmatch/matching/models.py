"""Data models for the scoring engine."""

from dataclasses import dataclass, field
from typing import List, Optional

MATCH_CLASS_THRESHOLDS = (
    (80, "excellent"),
    (60, "good"),
    (40, "fair"),
)


def classify_score(score: int) -> str:
    """Map a 0-100 score to a display tier: excellent, good, fair or poor."""
    for threshold, label in MATCH_CLASS_THRESHOLDS:
        if score >= threshold:
            return label
    return "poor"


@dataclass(frozen=True)
class DimensionScore:
    """Contribution of one active dimension to a candidate's score.

    Attributes:
        name: Dimension name (skills, experience, ...)
        weight: Points added to the maximum possible score
        earned: Points the candidate earned (weight * fraction)
        fraction: Share of the weight earned, 0 to 1
    """

    name: str
    weight: float
    earned: float
    fraction: float

    @property
    def matched(self) -> bool:
        return self.fraction > 0


@dataclass
class MatchResult:
    """Score of one candidate against one set of criteria.

    Created fresh per (criteria, candidate) pair and never persisted.

    Attributes:
        candidate_id: Identifier of the scored candidate
        score: Weighted match percentage, rounded and clamped to 0-100
        passes_filters: Always True; every dimension is scored, none excludes
        total: Points earned across active dimensions
        max_possible: Sum of the weights of active dimensions
        dimensions: Per-dimension breakdown, in weight-table order
    """

    candidate_id: str
    score: int
    passes_filters: bool = True
    total: float = 0.0
    max_possible: float = 0.0
    dimensions: List[DimensionScore] = field(default_factory=list)

    @property
    def match_class(self) -> str:
        return classify_score(self.score)

    def dimension(self, name: str) -> Optional[DimensionScore]:
        """Breakdown entry for a dimension, or None if it was inactive."""
        for dimension in self.dimensions:
            if dimension.name == name:
                return dimension
        return None

    @property
    def matched_dimensions(self) -> List[str]:
        return [d.name for d in self.dimensions if d.matched]

    @property
    def missed_dimensions(self) -> List[str]:
        return [d.name for d in self.dimensions if not d.matched]
