"""Candidate repositories: where the pool of candidates for a search comes from.

The scoring engine does not care how candidates are stored. A repository
returns CandidateRecords for a search, optionally pre-filtered by the free
text query; everything it returns is scored.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from talentmatch.criteria.models import SearchCriteria
from talentmatch.domain.models import CandidateRecord
from talentmatch.logging import get_logger

from .exceptions import RepositoryError

logger = get_logger(__name__, component="repository")

CandidateInput = Union[CandidateRecord, Mapping[str, Any]]


def searchable_text(candidate: CandidateRecord) -> str:
    """Lower-cased text the free-text query is matched against."""
    parts = [
        candidate.full_name,
        candidate.location_text,
        *candidate.skills,
        *candidate.preferred_locations,
        *(entry.degree for entry in candidate.education_entries),
    ]
    return " ".join(part for part in parts if part).lower()


def matches_search_text(candidate: CandidateRecord, search_text: Optional[str]) -> bool:
    """True if any word of the query occurs in the candidate's searchable text.

    An empty query matches everyone.
    """
    if not search_text:
        return True
    haystack = searchable_text(candidate)
    return any(token in haystack for token in search_text.lower().split())


class CandidateRepository(ABC):
    """Source of candidate records for a search."""

    @abstractmethod
    def fetch_candidates(self, criteria: SearchCriteria) -> List[CandidateRecord]:
        """Return the candidate pool for a search.

        Args:
            criteria: Normalized search criteria (repositories may use
                ``search_text`` to narrow the pool; scoring criteria must
                not be used to exclude candidates)

        Returns:
            List of CandidateRecord in the repository's natural order

        Raises:
            RepositoryError: If the underlying source cannot be read
        """


class InMemoryCandidateRepository(CandidateRepository):
    """Repository backed by a list held in memory.

    Accepts CandidateRecords or raw resume documents; documents that cannot
    be turned into a record are skipped with a warning.
    """

    def __init__(
        self,
        candidates: Optional[Iterable[CandidateInput]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.logger = logger_instance or logger
        self._candidates: List[CandidateRecord] = []
        for candidate in candidates or []:
            self.add(candidate)

    def add(self, candidate: CandidateInput) -> Optional[CandidateRecord]:
        """Add one candidate; returns the stored record or None if it was skipped."""
        if isinstance(candidate, CandidateRecord):
            record = candidate
        elif isinstance(candidate, Mapping):
            try:
                record = CandidateRecord.from_document(candidate)
            except ValidationError as e:
                self.logger.warning(
                    f"Skipping candidate document that failed validation: {e.error_count()} error(s)",
                    extra={"event": "repository.candidate.invalid"},
                )
                return None
        else:
            self.logger.warning(
                "Skipping candidate entry that is not a mapping",
                extra={
                    "event": "repository.candidate.invalid",
                    "entry_type": type(candidate).__name__,
                },
            )
            return None

        self._candidates.append(record)
        return record

    def __len__(self) -> int:
        return len(self._candidates)

    def fetch_candidates(self, criteria: SearchCriteria) -> List[CandidateRecord]:
        return [
            candidate for candidate in self._candidates
            if matches_search_text(candidate, criteria.search_text)
        ]


class FileCandidateRepository(CandidateRepository):
    """Repository reading resume documents from a YAML or JSON file.

    The file holds either a list of documents or a mapping with a
    ``candidates`` list. JSON is read through the YAML parser. The file is
    loaded on first use; call reload() to pick up changes.
    """

    def __init__(self, path: Union[str, Path], logger_instance: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger_instance or logger
        self._store: Optional[InMemoryCandidateRepository] = None

    def reload(self) -> int:
        """Read the file again.

        Returns:
            Number of candidates loaded

        Raises:
            RepositoryError: If the file is missing, unreadable or malformed
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise RepositoryError("Candidate file not found", source=str(self.path))
        except yaml.YAMLError as e:
            raise RepositoryError(f"Failed to parse candidate file: {e}", source=str(self.path))
        except OSError as e:
            raise RepositoryError(f"Failed to read candidate file: {e}", source=str(self.path))

        if data is None:
            documents: List[Any] = []
        elif isinstance(data, Mapping) and isinstance(data.get("candidates"), list):
            documents = data["candidates"]
        elif isinstance(data, list):
            documents = data
        else:
            raise RepositoryError(
                "Candidate file must contain a list or a mapping with a 'candidates' list",
                source=str(self.path),
            )

        self._store = InMemoryCandidateRepository(documents, logger_instance=self.logger)

        self.logger.info(
            f"Loaded {len(self._store)} candidates",
            extra={
                "event": "repository.loaded",
                "path": str(self.path),
                "document_count": len(documents),
                "candidate_count": len(self._store),
            },
        )
        return len(self._store)

    def fetch_candidates(self, criteria: SearchCriteria) -> List[CandidateRecord]:
        if self._store is None:
            self.reload()
        return self._store.fetch_candidates(criteria)
