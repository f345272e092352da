"""Criteria normalization: raw filter payloads to canonical SearchCriteria.

The normalizer:
1. Merges a saved job's requirements (``jobCriteria``) into the ad-hoc filters
2. Coerces each field independently into its canonical form
3. Drops any field it cannot coerce instead of failing the request
"""

import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Type

from talentmatch.domain.models import EducationLevel, ExperienceLevel, JobType, WorkType
from talentmatch.logging import get_logger
from talentmatch.utils.coercion import SEQUENCE_TYPES, to_number, to_string_list, unique

from .models import DEFAULT_SALARY_RANGE, SearchCriteria

logger = get_logger(__name__, component="criteria")

# Canonical field -> accepted payload keys (first present key wins)
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "search_text": ("searchText", "search_text"),
    "skills": ("skills",),
    "locations": ("locations", "location"),
    "experience_levels": ("experience", "experienceLevels", "experience_levels"),
    "work_types": ("workType", "workTypes", "work_types"),
    "job_types": ("jobType", "jobTypes", "job_types"),
    "education_levels": ("education", "educationLevels", "education_levels"),
    "availability": ("availability",),
    "salary_range": ("salaryRange", "salary_range"),
}

JOB_CRITERIA_KEYS: Tuple[str, ...] = ("jobCriteria", "job_criteria")

# Saved-job keys whose values are unioned with the user's own filters
JOB_CRITERIA_UNION_FIELDS: Dict[str, Tuple[str, ...]] = {
    "skills": ("requiredSkills", "skills"),
    "locations": ("requiredLocations", "locations"),
}

# Saved-job keys whose values replace the user's own filters
JOB_CRITERIA_OVERRIDE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "experience": ("requiredExperience", "experience"),
    "workType": ("requiredWorkType", "workType"),
    "jobType": ("requiredJobType", "jobType"),
    "education": ("requiredEducation", "education"),
    "availability": ("requiredAvailability", "availability"),
    "salaryRange": ("requiredSalary", "salaryRange"),
}

# Common spellings that do not reduce to an enum value on their own
ENUM_SYNONYMS: Dict[str, str] = {
    "executive": "exec",
    "entrylevel": "entry",
    "midlevel": "mid",
    "onsite": "office",
    "inoffice": "office",
    "masters": "master",
    "bachelors": "bachelor",
    "doctorate": "phd",
    "secondary": "highschool",
}


def merge_job_criteria(job_criteria: Mapping[str, Any], user_filters: Mapping[str, Any]) -> Dict[str, Any]:
    """Combine a saved job's requirements with ad-hoc user filters.

    List fields (skills, locations) are unioned with the job's values first;
    every other field present on the job overrides the user's value. The
    ``jobCriteria`` key itself is not carried into the result.

    Args:
        job_criteria: Saved job requirements (``requiredSkills``, ``requiredSalary``, ...)
        user_filters: Raw filter payload from the search client

    Returns:
        New raw filter payload
    """
    merged = {k: v for k, v in user_filters.items() if k not in JOB_CRITERIA_KEYS}
    if not isinstance(job_criteria, Mapping):
        return merged

    for target, keys in JOB_CRITERIA_UNION_FIELDS.items():
        job_values = to_string_list(_pick(job_criteria, keys), split_commas=True)
        if job_values:
            aliases = FIELD_ALIASES[target]
            user_values = to_string_list(_pick(merged, aliases), split_commas=True)
            for alias in aliases:
                merged.pop(alias, None)
            merged[target] = unique(job_values + user_values)

    for target, keys in JOB_CRITERIA_OVERRIDE_FIELDS.items():
        value = _pick(job_criteria, keys)
        if target == "salaryRange":
            if isinstance(value, (list, tuple)) and len(value) == 2:
                merged[target] = list(value)
        elif _is_present(value):
            merged[target] = value

    return merged


class CriteriaNormalizer:
    """Turns loosely-typed filter payloads into SearchCriteria.

    Never raises for bad input: a field that cannot be coerced is dropped,
    which makes that criterion inactive, and a warning is logged.
    """

    def __init__(
        self,
        default_salary_range: Tuple[float, float] = DEFAULT_SALARY_RANGE,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize CriteriaNormalizer.

        Args:
            default_salary_range: Range substituted for a missing or invalid
                salary filter; also the "unconstrained" sentinel
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.default_salary_range = tuple(default_salary_range)
        self.logger = logger_instance or logger
        self._coercers: Dict[str, Callable[[Any], Any]] = {
            "search_text": _coerce_optional_text,
            "skills": _coerce_terms,
            "locations": _coerce_terms,
            "experience_levels": _enum_coercer(ExperienceLevel),
            "work_types": _enum_coercer(WorkType),
            "job_types": _enum_coercer(JobType),
            "education_levels": _enum_coercer(EducationLevel),
            "availability": _coerce_optional_text,
            "salary_range": _coerce_salary_range,
        }

    def normalize(self, raw: Any) -> SearchCriteria:
        """Normalize a raw filter payload.

        Args:
            raw: Mapping with optional keys searchText, skills, locations,
                experience, workType, jobType, salaryRange, education,
                availability and jobCriteria. An existing SearchCriteria is
                returned unchanged.

        Returns:
            SearchCriteria (empty criteria for None or non-mapping input)
        """
        if isinstance(raw, SearchCriteria):
            return raw

        if raw is None:
            return self._build({})

        if not isinstance(raw, Mapping):
            self.logger.warning(
                "Filter payload is not a mapping; using empty criteria",
                extra={
                    "event": "criteria.payload_invalid",
                    "payload_type": type(raw).__name__,
                },
            )
            return self._build({})

        payload: Mapping[str, Any] = raw
        job_criteria = _pick(raw, JOB_CRITERIA_KEYS)
        if isinstance(job_criteria, Mapping):
            payload = merge_job_criteria(job_criteria, raw)
        elif job_criteria is not None:
            self._log_dropped("job_criteria", job_criteria, "expected a mapping")

        values: Dict[str, Any] = {}
        for field_name, aliases in FIELD_ALIASES.items():
            raw_value = _pick(payload, aliases)
            if raw_value is None:
                continue

            try:
                value = self._coercers[field_name](raw_value)
            except (TypeError, ValueError) as e:
                self._log_dropped(field_name, raw_value, str(e))
                continue

            if value is None:
                if field_name == "salary_range" or _is_present(raw_value):
                    self._log_dropped(field_name, raw_value, "could not be coerced")
                continue

            values[field_name] = value

        if "salary_range" in values and values["salary_range"][1] <= 0:
            self._log_dropped("salary_range", values.pop("salary_range"), "max must be > 0")

        criteria = self._build(values)

        self.logger.debug(
            "Criteria normalized",
            extra={
                "event": "criteria.normalized",
                "active_dimensions": criteria.active_dimensions(),
                "job_criteria_merged": isinstance(job_criteria, Mapping),
            },
        )
        return criteria

    def _build(self, values: Dict[str, Any]) -> SearchCriteria:
        values.setdefault("salary_range", self.default_salary_range)
        return SearchCriteria(salary_default=self.default_salary_range, **values)

    def _log_dropped(self, field_name: str, raw_value: Any, reason: str) -> None:
        self.logger.warning(
            f"Dropping filter field '{field_name}': {reason}",
            extra={
                "event": "criteria.field_dropped",
                "field": field_name,
                "raw_value": repr(raw_value)[:200],
            },
        )


def normalize_criteria(raw: Any, default_salary_range: Tuple[float, float] = DEFAULT_SALARY_RANGE) -> SearchCriteria:
    """Normalize a raw filter payload with a throwaway CriteriaNormalizer."""
    return CriteriaNormalizer(default_salary_range=default_salary_range).normalize(raw)


def _pick(payload: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, SEQUENCE_TYPES + (dict,)):
        return len(value) > 0
    return True


def _coerce_optional_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    stripped = value.strip()
    return stripped or None


def _coerce_terms(value: Any) -> FrozenSet[str]:
    """Deduplicate case-insensitively, keeping the first spelling seen."""
    if isinstance(value, Mapping):
        raise TypeError("expected a string or list of strings")

    seen = set()
    terms: List[str] = []
    for term in to_string_list(value, split_commas=True):
        key = term.lower()
        if key not in seen:
            seen.add(key)
            terms.append(term)
    return frozenset(terms)


def _enum_coercer(enum_cls: Type[Enum]) -> Callable[[Any], FrozenSet[Enum]]:
    known = {member.value: member for member in enum_cls}

    def coerce(value: Any) -> FrozenSet[Enum]:
        if isinstance(value, Mapping):
            raise TypeError("expected a string or list of strings")

        members = set()
        for item in to_string_list(value, split_commas=True):
            token = re.sub(r"[^a-z]", "", item.lower())
            token = ENUM_SYNONYMS.get(token, token)
            if token in known:
                members.add(known[token])
            else:
                logger.debug(
                    f"Ignoring unknown {enum_cls.__name__} value '{item}'",
                    extra={"event": "criteria.value_ignored", "value": item},
                )
        return frozenset(members)

    return coerce


def _coerce_salary_range(value: Any) -> Optional[Tuple[float, float]]:
    """Accept [min, max], (min, max) or {"min": .., "max": ..}."""
    if isinstance(value, Mapping):
        bounds = [value.get("min"), value.get("max")]
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        bounds = list(value)
    else:
        return None

    low = to_number(bounds[0], default=None)
    high = to_number(bounds[1], default=None)
    if low is None or high is None:
        return None

    if low > high:
        low, high = high, low
    return (low, high)
