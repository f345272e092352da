"""Candidate search: repositories and the search service."""

from .exceptions import RepositoryError
from .models import RankedCandidate, SearchResponse
from .repository import (
    CandidateRepository,
    FileCandidateRepository,
    InMemoryCandidateRepository,
    matches_search_text,
)
from .service import CandidateSearchService, is_listing_visible

__all__ = [
    "CandidateSearchService",
    "CandidateRepository",
    "InMemoryCandidateRepository",
    "FileCandidateRepository",
    "RankedCandidate",
    "SearchResponse",
    "RepositoryError",
    "is_listing_visible",
    "matches_search_text",
]
