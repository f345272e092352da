"""Search orchestration: filters in, ranked candidates out."""

import logging
import time
from datetime import datetime
from typing import Any, List, Optional
from uuid import uuid4

from talentmatch.config.models import ScoringConfig
from talentmatch.criteria.normalizer import CriteriaNormalizer
from talentmatch.domain.models import CandidateRecord
from talentmatch.logging import get_logger
from talentmatch.logging.context import log_context
from talentmatch.matching.engine import CandidateMatcher
from talentmatch.utils.timestamps import ensure_utc, utc_now

from .models import RankedCandidate, SearchResponse
from .repository import CandidateRepository

logger = get_logger(__name__, component="search")


def is_listing_visible(candidate: CandidateRecord, now: datetime) -> bool:
    """Whether employers may see this candidate right now.

    A listing is visible when it is active and its activation has not
    expired. Listings that were never given an expiry are hidden.
    """
    if not candidate.is_active:
        return False
    if candidate.activation_expires_at is None:
        return False
    return candidate.activation_expires_at > now


class CandidateSearchService:
    """
    Runs a single search from raw filters to a ranked result list.

    The service coordinates normalizing the filter payload, fetching the
    candidate pool, dropping listings employers may not see, scoring every
    remaining candidate and ranking the results.
    """

    def __init__(
        self,
        repository: CandidateRepository,
        scoring_config: Optional[ScoringConfig] = None,
        matcher: Optional[CandidateMatcher] = None,
        normalizer: Optional[CriteriaNormalizer] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """
        Initialize the search service.

        Args:
            repository: Source of candidate records
            scoring_config: Scoring settings (defaults to ScoringConfig())
            matcher: Matcher to use (defaults to one built from scoring_config.weights)
            normalizer: Normalizer to use (defaults to one built from scoring_config)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.repository = repository
        self.config = scoring_config or ScoringConfig()
        self.matcher = matcher or CandidateMatcher(weights=self.config.weights)
        self.normalizer = normalizer or CriteriaNormalizer(
            default_salary_range=self.config.default_salary_range
        )
        self.logger = logger_instance or logger

    def search(
        self,
        raw_filters: Any,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> SearchResponse:
        """
        Execute a search.

        Steps:
        1. Normalize raw_filters (merging any jobCriteria)
        2. Fetch the candidate pool from the repository
        3. Drop inactive or expired listings (if configured)
        4. Score every remaining candidate
        5. Rank by descending score, ties in repository order
        6. Apply the limit

        Args:
            raw_filters: Raw filter payload from the request layer
            limit: Maximum results (None = config default, 0 = all)
            now: Reference time for listing expiry (defaults to utc_now())

        Returns:
            SearchResponse

        Raises:
            RepositoryError: If the candidate pool cannot be fetched
        """
        started = time.monotonic()
        search_id = uuid4().hex
        now = ensure_utc(now) or utc_now()
        if limit is None:
            limit = self.config.default_limit

        with log_context(search_id=search_id):
            criteria = self.normalizer.normalize(raw_filters)
            pool = self.repository.fetch_candidates(criteria)
            total_candidates = len(pool)

            if self.config.only_active_candidates:
                visible = [c for c in pool if is_listing_visible(c, now)]
            else:
                visible = list(pool)
            excluded_inactive = total_candidates - len(visible)

            if not criteria.has_active_criteria:
                self.logger.info(
                    "No active criteria; all candidates score 0 and keep repository order",
                    extra={"event": "search.criteria.empty"},
                )

            results = self.matcher.score_all(criteria, visible, max_workers=self.config.max_workers)
            # sorted() is stable, so equal scores keep repository order
            ranked_pairs = sorted(
                zip(visible, results), key=lambda pair: pair[1].score, reverse=True
            )
            if limit and limit > 0:
                ranked_pairs = ranked_pairs[:limit]

            ranked: List[RankedCandidate] = [
                RankedCandidate(rank=position, candidate=candidate, result=result)
                for position, (candidate, result) in enumerate(ranked_pairs, start=1)
            ]

            response = SearchResponse(
                search_id=search_id,
                criteria=criteria,
                results=ranked,
                total_candidates=total_candidates,
                excluded_inactive=excluded_inactive,
                scored_count=len(results),
                duration_seconds=time.monotonic() - started,
            )

            self.logger.info(
                "Search completed",
                extra={
                    "event": "search.completed",
                    "active_dimensions": criteria.active_dimensions(),
                    "total_candidates": total_candidates,
                    "excluded_inactive": excluded_inactive,
                    "scored": response.scored_count,
                    "returned": response.returned_count,
                    "top_score": ranked[0].score if ranked else None,
                    "duration_seconds": round(response.duration_seconds, 4),
                },
            )

        return response
