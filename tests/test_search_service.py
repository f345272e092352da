"""Unit tests for the search service.

Tests CandidateSearchService for:
- Listing visibility (inactive and expired candidates)
- Ranking order and tie handling
- Limits
- Empty criteria
- Search summary logging
"""

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from talentmatch.config.models import ScoringConfig
from talentmatch.criteria import SearchCriteria
from talentmatch.search import (
    CandidateRepository,
    CandidateSearchService,
    InMemoryCandidateRepository,
    RepositoryError,
    is_listing_visible,
)
from tests.helpers import make_candidate

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def pool():
    """Candidates in repository order with known scores for React + mid."""
    return [
        make_candidate("low", skills=["Java"]),
        make_candidate("tie-a", skills=["React"]),
        make_candidate("best", skills=["React"], total_experience_years=3),
        make_candidate("tie-b", skills=["React"]),
        make_candidate("off", skills=["React"], total_experience_years=3, is_active=False),
        make_candidate(
            "expired",
            skills=["React"],
            total_experience_years=3,
            activation_expires_at=NOW - timedelta(days=1),
        ),
    ]


@pytest.fixture
def service(pool):
    return CandidateSearchService(InMemoryCandidateRepository(pool))


FILTERS = {"skills": ["React"], "experience": ["mid"]}


class TestListingVisibility:
    """Tests for is_listing_visible."""

    def test_active_with_future_expiry(self):
        """Test that active, unexpired listings are visible."""
        assert is_listing_visible(make_candidate(), NOW) is True

    def test_active_without_expiry(self):
        """Test that listings never given an expiry are hidden."""
        candidate = make_candidate(is_active=True, activation_expires_at=None)

        assert is_listing_visible(candidate, NOW) is False

    def test_listing_without_expiry_excluded_from_search(self, pool):
        """Test that a search counts a listing without expiry as excluded."""
        pool.append(make_candidate("no-expiry", skills=["React"], activation_expires_at=None))
        service = CandidateSearchService(InMemoryCandidateRepository(pool))

        response = service.search(FILTERS, now=NOW)

        assert response.excluded_inactive == 3
        assert "no-expiry" not in [r.candidate.candidate_id for r in response.results]

    def test_inactive(self):
        """Test that switched-off listings are hidden."""
        assert is_listing_visible(make_candidate(is_active=False), NOW) is False

    def test_expiry_boundary(self):
        """Test that a listing expiring exactly now is hidden."""
        assert is_listing_visible(make_candidate(activation_expires_at=NOW + timedelta(seconds=1)), NOW) is True
        assert is_listing_visible(make_candidate(activation_expires_at=NOW), NOW) is False


class TestCandidateSearchService:
    """Test suite for CandidateSearchService.search."""

    def test_ranked_by_score(self, service):
        """Test descending order with ties in repository order."""
        response = service.search(FILTERS, now=NOW)

        assert [r.candidate.candidate_id for r in response.results] == ["best", "tie-a", "tie-b", "low"]
        assert [r.score for r in response.results] == [100, 60, 60, 0]
        assert [r.rank for r in response.results] == [1, 2, 3, 4]

    def test_counts(self, service):
        """Test pool, exclusion and scoring counts."""
        response = service.search(FILTERS, now=NOW)

        assert response.total_candidates == 6
        assert response.excluded_inactive == 2
        assert response.scored_count == 4
        assert response.returned_count == 4
        assert response.search_id
        assert response.duration_seconds >= 0

    def test_inactive_included_when_configured(self, pool):
        """Test that visibility filtering can be switched off."""
        service = CandidateSearchService(
            InMemoryCandidateRepository(pool),
            scoring_config=ScoringConfig(only_active_candidates=False),
        )

        response = service.search(FILTERS, now=NOW)

        assert response.excluded_inactive == 0
        assert [r.candidate.candidate_id for r in response.results][:3] == ["best", "off", "expired"]

    def test_limit(self, service):
        """Test that the limit truncates after ranking."""
        response = service.search(FILTERS, limit=2, now=NOW)

        assert [r.candidate.candidate_id for r in response.results] == ["best", "tie-a"]
        assert response.scored_count == 4

    def test_default_limit_from_config(self, pool):
        """Test that the configured default limit applies when none is given."""
        service = CandidateSearchService(
            InMemoryCandidateRepository(pool),
            scoring_config=ScoringConfig(default_limit=1),
        )

        assert service.search(FILTERS, now=NOW).returned_count == 1
        assert service.search(FILTERS, limit=0, now=NOW).returned_count == 4

    def test_empty_criteria_keep_repository_order(self, service, caplog):
        """Test that no criteria scores everyone 0 in repository order."""
        with caplog.at_level(logging.INFO):
            response = service.search({}, now=NOW)

        assert [r.candidate.candidate_id for r in response.results] == ["low", "tie-a", "best", "tie-b"]
        assert {r.score for r in response.results} == {0}
        assert any(getattr(r, "event", None) == "search.criteria.empty" for r in caplog.records)

    def test_malformed_filters_do_not_fail(self, service):
        """Test that a garbage payload is treated as empty criteria."""
        response = service.search("skills=react", now=NOW)

        assert response.returned_count == 4
        assert response.criteria.has_active_criteria is False

    def test_accepts_prebuilt_criteria(self, service):
        """Test that SearchCriteria can be passed directly."""
        criteria = SearchCriteria(skills=frozenset({"Java"}))

        response = service.search(criteria, now=NOW)

        assert response.criteria is criteria
        assert response.results[0].candidate.candidate_id == "low"

    def test_thread_pool_same_ranking(self, pool):
        """Test that threaded scoring does not change the ranking."""
        service = CandidateSearchService(
            InMemoryCandidateRepository(pool),
            scoring_config=ScoringConfig(max_workers=4),
        )

        response = service.search(FILTERS, now=NOW)

        assert [r.candidate.candidate_id for r in response.results] == ["best", "tie-a", "tie-b", "low"]

    def test_completion_logged(self, service, caplog):
        """Test that one completion record carries the search summary."""
        with caplog.at_level(logging.INFO):
            response = service.search(FILTERS, now=NOW)

        completed = [r for r in caplog.records if getattr(r, "event", None) == "search.completed"]
        assert len(completed) == 1
        assert completed[0].returned == 4
        assert completed[0].top_score == 100
        assert completed[0].active_dimensions == ["skills", "experience"]
        assert response.search_id

    def test_repository_errors_propagate(self):
        """Test that repository failures reach the caller."""
        repository = Mock(spec=CandidateRepository)
        repository.fetch_candidates.side_effect = RepositoryError("store offline", source="mongo")
        service = CandidateSearchService(repository)

        with pytest.raises(RepositoryError, match="store offline"):
            service.search(FILTERS)

    def test_payload(self, service):
        """Test the presentation payload of a response."""
        payload = service.search(FILTERS, limit=1, now=NOW).to_payload()

        assert len(payload) == 1
        assert payload[0]["candidateId"] == "best"
        assert payload[0]["rank"] == 1
        assert payload[0]["score"] == 100
        assert payload[0]["matchClass"] == "excellent"
