"""Data models for search execution and results."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from talentmatch.criteria.models import SearchCriteria
from talentmatch.domain.models import CandidateRecord
from talentmatch.matching.models import MatchResult
from talentmatch.matching.utils import build_result_payload


@dataclass
class RankedCandidate:
    """A candidate together with its score and 1-based rank."""

    rank: int
    candidate: CandidateRecord
    result: MatchResult

    @property
    def score(self) -> int:
        return self.result.score

    def to_payload(self) -> Dict[str, Any]:
        payload = build_result_payload(self.candidate, self.result)
        payload["rank"] = self.rank
        return payload


@dataclass
class SearchResponse:
    """
    Outcome of one search request.

    Attributes:
        search_id: Identifier attached to every log line of this search
        criteria: Normalized criteria the candidates were scored against
        results: Ranked candidates, best first, after the limit was applied
        total_candidates: Candidates returned by the repository
        excluded_inactive: Candidates skipped because their listing is inactive or expired
        scored_count: Candidates that were scored
        duration_seconds: Wall time spent on the search
    """

    search_id: str
    criteria: SearchCriteria
    results: List[RankedCandidate] = field(default_factory=list)
    total_candidates: int = 0
    excluded_inactive: int = 0
    scored_count: int = 0
    duration_seconds: float = 0.0

    @property
    def returned_count(self) -> int:
        return len(self.results)

    def to_payload(self) -> List[Dict[str, Any]]:
        """Ordered list of presentation dicts, best match first."""
        return [ranked.to_payload() for ranked in self.results]
